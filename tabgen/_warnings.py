"""Custom warning category for tabgen."""


class TabgenWarning(UserWarning):
    """Warning category for tabgen-specific warnings.

    This can be used to filter tabgen warnings:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=TabgenWarning)
    """

    pass
