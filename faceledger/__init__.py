"""Match against enrolled face descriptors and keep an audit ledger of every decision."""
__version__ = "0.1.0"
