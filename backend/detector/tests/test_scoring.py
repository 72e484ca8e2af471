import math

from django.test import SimpleTestCase

from detector.models import RiskLabel
from detector.risk_engine.scoring import aggregate, label_from_score
from detector.risk_engine.types import REPEATABLE_FLAG_KEYS, EvidenceFlag, EvidenceSet


def _flag(key, weight, reason='reason'):
    return EvidenceFlag(key=key, reason=reason, weight=weight)


class AggregateTests(SimpleTestCase):
    def test_empty_sequence_is_low_risk(self):
        self.assertEqual(aggregate([]), (0, RiskLabel.LOW))

    def test_score_is_sum_of_weights(self):
        flags = [_flag('a', 1), _flag('b', 2), _flag('c', 0.5)]
        score, _ = aggregate(flags)
        self.assertEqual(score, 3.5)

    def test_informational_flags_do_not_change_score(self):
        score, label = aggregate([_flag('found_email', 0), _flag('found_url', 0)])
        self.assertEqual(score, 0)
        self.assertEqual(label, RiskLabel.LOW)

    def test_label_thresholds(self):
        cases = [
            (0, RiskLabel.LOW),
            (2.9, RiskLabel.LOW),
            (3, RiskLabel.MEDIUM),
            (5, RiskLabel.MEDIUM),
            (5.99, RiskLabel.MEDIUM),
            (6, RiskLabel.HIGH),
            (17, RiskLabel.HIGH),
        ]
        for score, expected in cases:
            with self.subTest(score=score):
                self.assertEqual(label_from_score(score), expected)

    def test_label_matches_aggregated_score(self):
        flags = [_flag('suspicious_text', 3), _flag('pdf_modified', 1), _flag('url_young', 2)]
        score, label = aggregate(flags)
        self.assertEqual(score, 6)
        self.assertEqual(label, 'High Risk')


class EvidenceFlagTests(SimpleTestCase):
    def test_rejects_negative_weight(self):
        with self.assertRaises(ValueError):
            _flag('bad', -1)

    def test_rejects_non_finite_weight(self):
        for weight in (math.inf, math.nan):
            with self.subTest(weight=weight):
                with self.assertRaises(ValueError):
                    _flag('bad', weight)

    def test_rejects_non_numeric_weight(self):
        for weight in ('3', None, True):
            with self.subTest(weight=weight):
                with self.assertRaises(ValueError):
                    _flag('bad', weight)

    def test_zero_weight_is_allowed(self):
        self.assertEqual(_flag('found_email', 0).weight, 0)

    def test_as_dict_exposes_response_fields(self):
        flag = EvidenceFlag(key='idn', reason='Punycode domain', weight=2, explanation='Homograph risk.')
        self.assertEqual(
            flag.as_dict(),
            {'key': 'idn', 'reason': 'Punycode domain', 'weight': 2, 'explanation': 'Homograph risk.'},
        )


class EvidenceSetTests(SimpleTestCase):
    def test_add_returns_new_set_and_keeps_order(self):
        empty = EvidenceSet()
        first = empty.add(_flag('a', 1))
        second = first.add(_flag('b', 2))

        self.assertEqual(len(empty), 0)
        self.assertEqual(first.keys(), ['a'])
        self.assertEqual(second.keys(), ['a', 'b'])

    def test_same_rule_and_finding_is_recorded_once(self):
        evidence = EvidenceSet().extend([_flag('phishy_tone', 3), _flag('phishy_tone', 3)])
        self.assertEqual(evidence.keys(), ['phishy_tone'])
        self.assertEqual(aggregate(evidence)[0], 3)

    def test_non_repeatable_rule_is_kept_once_even_with_new_reason(self):
        evidence = EvidenceSet().extend([
            _flag('edited_software', 2, reason='Image software: GIMP 2.10'),
            _flag('edited_software', 2, reason='Image software: Adobe Photoshop'),
        ])
        self.assertEqual([flag.reason for flag in evidence], ['Image software: GIMP 2.10'])
        self.assertEqual(aggregate(evidence)[0], 2)

    def test_only_link_domain_age_rule_repeats(self):
        self.assertEqual(REPEATABLE_FLAG_KEYS, frozenset({'link_new_domain'}))

    def test_same_rule_with_distinct_findings_is_kept(self):
        evidence = EvidenceSet().extend([
            _flag('link_new_domain', 2, reason='Link to young domain (a.example)'),
            _flag('link_new_domain', 2, reason='Link to young domain (b.example)'),
        ])
        self.assertEqual(len(evidence), 2)
