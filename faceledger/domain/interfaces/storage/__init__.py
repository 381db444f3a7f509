from .descriptor_store import DescriptorStore
from .ledger import RecognitionLedger

__all__ = ["DescriptorStore", "RecognitionLedger"]
