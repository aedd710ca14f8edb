"""CEP weather: a gateway and a resolver that turn a Brazilian postal code into temperatures."""

__version__ = "0.1.0"
