"""central-config-generator: centralize .NET build properties and package versions."""

__version__ = "0.1.0"
