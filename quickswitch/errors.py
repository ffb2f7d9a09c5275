"""Exception types raised inside adapters; services turn them into sentinel results."""


class QuickSwitchError(Exception):
    """Base exception for QuickSwitch errors."""
    pass


class ProviderError(QuickSwitchError):
    """A provider strategy failed to enumerate or activate."""
    pass


class ProviderUnavailableError(ProviderError):
    """The backing API or tool is not present (no pywinauto, no wmctrl, no debugging endpoint)."""
    pass


class ProviderTimeoutError(ProviderError):
    """An external command or endpoint did not answer in time."""
    pass


class ActivationError(QuickSwitchError):
    """Bringing a window or tab to the front failed."""
    pass
