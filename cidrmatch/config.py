import os
import logging

from configparser import Error as ConfigParserError, RawConfigParser

from cidrmatch import CidrError
from cidrmatch.network import parse_network

__all__ = ['DEFAULT_CONFIG', 'Config', 'NetworkGroup']

DEFAULT_CONFIG = os.path.expanduser('~/.cidrmatchrc')

logger = logging.getLogger(__name__)


class NetworkGroup(object):
    """
    One or more network ranges under a common name, which matches an address
    if any of its ranges does.
    """
    def __init__(self, name, networks):
        self.name = name
        self.networks = list(networks)

    def matches(self, address):
        return any(network.matches(address) for network in self.networks)

    __contains__ = matches

    def __repr__(self):
        cidrs = ', '.join(network.cidr for network in self.networks)
        return f"<NetworkGroup {self.name}: {cidrs}>"


class Config(object):
    def __init__(self, path=None):
        self.path = DEFAULT_CONFIG if path is None else path
        self.parser = RawConfigParser()
        try:
            found = self.parser.read(self.path)
        except ConfigParserError as err:
            raise CidrError("Unable to read configuration", self.path) from err
        if found:
            logger.debug("Read configuration from %s.", self.path)
        else:
            logger.debug("No configuration found at %s.", self.path)

    @property
    def strict(self):
        try:
            return self.parser.getboolean('cidrmatch', 'strict',
                                          fallback=False)
        except ValueError as err:
            raise CidrError("Invalid value for option 'strict'",
                            self.parser.get('cidrmatch', 'strict')) from err

    @property
    def network_names(self):
        if not self.parser.has_section('networks'):
            return []
        return self.parser.options('networks')

    def get_cidrs(self, name):
        """
        Return the list of address ranges configured for the given network
        name or None if there is no such network.
        """
        if not self.parser.has_option('networks', name):
            return None
        value = self.parser.get('networks', name)
        return [cidr.strip() for cidr in value.split(',') if cidr.strip()]

    def get_network(self, name_or_cidr, strict=None):
        """
        Return a NetworkGroup for either a network name from the [networks]
        section or a single address range in CIDR notation.
        """
        if strict is None:
            strict = self.strict

        cidrs = self.get_cidrs(name_or_cidr)
        if cidrs is None:
            cidrs = [name_or_cidr]
        elif not cidrs:
            raise CidrError("No address ranges configured for network",
                            name_or_cidr)

        networks = [parse_network(cidr, strict=strict) for cidr in cidrs]
        return NetworkGroup(name_or_cidr, networks)
