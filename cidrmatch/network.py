import re
import logging

from cidrmatch import MalformedInput
from cidrmatch.util import addr

__all__ = ['NetworkRange', 'parse_network']

_PREFIX_SUFFIX = re.compile(r'/([0-9]+)')
_STRICT_PREFIX = re.compile(r'[0-9]{1,3}')

logger = logging.getLogger(__name__)


def get_upper_bound(lower_bound, prefix_len):
    """
    Return the highest possible byte for every position of lower_bound, which
    is the byte itself if it's fully covered by the prefix, otherwise the byte
    with all its host bits set.
    """
    upper_bound = []
    c_pos = 8
    for byte in lower_bound:
        if prefix_len < c_pos:
            if prefix_len < c_pos - 8:
                host_bits = 8
            else:
                host_bits = 8 - ((prefix_len - c_pos) % 8)
            byte |= (1 << host_bits) - 1
        upper_bound.append(byte)
        c_pos += 8
    return tuple(upper_bound)


class NetworkRange(object):
    """
    A network range given in CIDR notation, represented by the lowest and
    highest allowed value of every single byte of an address.

    Instances are immutable, use parse_network() to create them.
    """
    __slots__ = ('_cidr', '_ipv6', '_prefix_len', '_lower', '_upper')

    def __init__(self, cidr, ipv6, prefix_len, lower_bound, upper_bound):
        setattr_ = super().__setattr__
        setattr_('_cidr', cidr)
        setattr_('_ipv6', ipv6)
        setattr_('_prefix_len', prefix_len)
        setattr_('_lower', tuple(lower_bound))
        setattr_('_upper', tuple(upper_bound))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def cidr(self):
        return self._cidr

    @property
    def ipv6(self):
        return self._ipv6

    @property
    def ipv4(self):
        return not self._ipv6

    @property
    def prefix_len(self):
        return self._prefix_len

    @property
    def lower_bound(self):
        return self._lower

    @property
    def upper_bound(self):
        return self._upper

    @property
    def first(self):
        return addr.format_address(self._lower)

    @property
    def last(self):
        return addr.format_address(self._upper)

    def matches(self, address):
        """
        Check whether the given address is within this network range.

        Addresses of the other address family never match and neither does
        text that isn't an IP address at all.
        """
        try:
            is_ipv6 = addr.is_ipv6_text(address)
        except MalformedInput:
            logger.debug("Not matching %r against %s, not an IP address.",
                         address, self._cidr)
            return False

        if is_ipv6 != self._ipv6:
            logger.debug("Not matching %r against %s, address family"
                         " differs.", address, self._cidr)
            return False

        try:
            candidate = addr.parse_address(address)
        except MalformedInput:
            logger.debug("Not matching %r against %s, unable to parse"
                         " address.", address, self._cidr)
            return False

        for lowest, byte, highest in zip(self._lower, candidate, self._upper):
            if not lowest <= byte <= highest:
                return False
        return True

    __contains__ = matches

    def __eq__(self, other):
        if not isinstance(other, NetworkRange):
            return NotImplemented
        return (self._ipv6, self._lower, self._upper) == \
            (other._ipv6, other._lower, other._upper)

    def __hash__(self):
        return hash((self._ipv6, self._lower, self._upper))

    def __repr__(self):
        family = "IPv6" if self._ipv6 else "IPv4"
        return f"<NetworkRange {self._cidr} ({family})>"


def parse_network(cidr, strict=False):
    """
    Create a NetworkRange from an address with an optional prefix length, like
    '10.0.0.0/8' or '2001:db8::/32'. Without a prefix length, the range only
    consists of the given address.

    The bits of the address beyond the prefix aren't masked, so the address
    is taken as the lower end of the range as is.

    If strict is True, the address needs to be valid and the prefix length
    can't exceed the address length, otherwise MalformedInput is raised.
    """
    netaddr, slash, prefix = cidr.partition('/')
    ipv6 = addr.is_ipv6_text(netaddr)
    max_prefix = 128 if ipv6 else 32

    if strict:
        if not slash:
            prefix_len = max_prefix
        elif _STRICT_PREFIX.fullmatch(prefix) and int(prefix) <= max_prefix:
            prefix_len = int(prefix)
        else:
            raise MalformedInput("Invalid prefix length", cidr)
    else:
        match = _PREFIX_SUFFIX.search(cidr)
        if match is None:
            logger.debug("No prefix length given for %r, using /%d.",
                         cidr, max_prefix)
            prefix_len = max_prefix
        else:
            if len(match.group(1)) > addr.MAX_DIGITS:
                raise MalformedInput("Invalid prefix length", cidr)
            prefix_len = int(match.group(1))

    lower_bound = addr.parse_address(netaddr, strict=strict)
    upper_bound = get_upper_bound(lower_bound, prefix_len)
    return NetworkRange(cidr, ipv6, prefix_len, lower_bound, upper_bound)
