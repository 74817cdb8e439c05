"""Exception classes for the subnet exporter."""


class SubnetExporterError(Exception):
    """Base exception for all exporter errors."""

    pass


# =============================================================================
# Input Shape Errors
# =============================================================================


class InputShapeError(SubnetExporterError):
    """Inventory data does not have the shape the analyzer requires."""

    pass


class InvalidCIDR(InputShapeError):
    """A CIDR block is not a valid IPv4 A.B.C.D/M string."""

    def __init__(self, cidr: str, reason: str = "expected A.B.C.D/M"):
        self.cidr = cidr
        self.reason = reason
        super().__init__(f"Invalid CIDR '{cidr}': {reason}")


class InvalidAddress(InputShapeError):
    """An assigned address is not a valid IPv4 dotted-quad."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid IPv4 address '{address}'")


class PrefixOutsideSubnet(InputShapeError):
    """A delegated prefix does not lie inside its enclosing subnet."""

    def __init__(self, prefix: str, subnet_cidr: str):
        self.prefix = prefix
        self.subnet_cidr = subnet_cidr
        super().__init__(f"Delegated prefix {prefix} is outside subnet {subnet_cidr}")


# =============================================================================
# Transport and Configuration Errors
# =============================================================================


class InventoryError(SubnetExporterError):
    """A call to the cloud inventory API failed."""

    pass


class ConfigurationError(SubnetExporterError):
    """The exporter cannot start with the given configuration."""

    pass
