"""Root of the politeness analysis exception hierarchy."""


class PolitenessError(Exception):
    """Base class for every error raised by the analysis stack."""


__all__ = ["PolitenessError"]
