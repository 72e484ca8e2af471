class ArtifactUnavailable(Exception):
    """The submitted artifact could not be acquired, so no assessment is possible."""


class PageUnavailable(Exception):
    """A fetched page gave no usable body; surfaced to checks as a failed lookup."""
