"""Errors raised while validating a deployment topology."""


class TopologyError(ValueError):
    """A deployment topology is internally inconsistent.

    Raised for cross-field and cross-construct problems that single-field
    validation cannot catch. Always raised before any resource is declared.
    """
