"""dotsetup: install .NET SDKs on CI runners."""

__version__ = "0.3.0"
