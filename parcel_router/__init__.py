"""Rule-driven parcel classification and routing."""

__version__ = "0.1.0"
