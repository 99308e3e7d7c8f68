"""K-line analysis for futures instruments: indicators, aggregation, loading."""

__version__ = "0.1.0"
