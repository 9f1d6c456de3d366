"""
API server package — HTTP interface.

Exposes release size deltas to clients and delegates to the release
fetcher and delta calculator.
"""
