class CidrError(Exception):
    def __init__(self, message, value=None):
        if value is not None:
            message = f"{message} ({value!r})"
        super().__init__(message)
        self.value = value


class MalformedInput(CidrError):
    pass


from cidrmatch.util.addr import format_address, parse_address  # noqa: E402
from cidrmatch.network import NetworkRange, parse_network  # noqa: E402

__all__ = ['CidrError', 'MalformedInput', 'NetworkRange', 'format_address',
           'parse_address', 'parse_network']
