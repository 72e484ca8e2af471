from detector.domain_utils import is_internationalized
from detector.models import SubjectType
from detector.risk_engine.checks.base import BaseEvidenceCheck

# Free or low-accountability registries historically favoured by scammers.
SUSPICIOUS_TLDS = frozenset({'tk', 'ml', 'ga', 'cf', 'gq'})


class HomographCheck(BaseEvidenceCheck):
    name = 'Homograph Hostname Check'
    subject_types = frozenset({SubjectType.URL})

    def run(self, context):
        if not is_internationalized(context.hostname):
            return []
        return [self.flag(
            key='idn',
            reason='Domain uses non-ASCII/punycode (possible homograph attack)',
            weight=2,
            explanation=f'Hostname {context.hostname} may imitate a familiar domain with look-alike characters.',
        )]


class SuspiciousTldCheck(BaseEvidenceCheck):
    name = 'Suspicious TLD Check'
    subject_types = frozenset({SubjectType.URL})

    def run(self, context):
        tld = (context.hostname or '').lower().rstrip('.').rsplit('.', 1)[-1]
        if '.' not in (context.hostname or '') or tld not in SUSPICIOUS_TLDS:
            return []
        return [self.flag(
            key='tld_susp',
            reason='Rare/free TLD often used by scammers',
            weight=1,
            explanation=f'.{tld} domains can be registered for free with little accountability.',
        )]
