"""Descriptor store interface for enrolled identities."""
from abc import ABC, abstractmethod
from typing import List, Optional

from faceledger.core.utils.descriptor import DescriptorLike

from ...entities.identity import IdentityRecord


class DescriptorStore(ABC):
    """Interface for durable storage of enrolled face descriptors."""

    @abstractmethod
    async def enroll(
        self,
        name: str,
        descriptor: DescriptorLike,
        source_reference: Optional[str] = None,
    ) -> int:
        """
        Enroll an identity.

        Args:
            name: Name to associate with the descriptor
            descriptor: Face descriptor vector
            source_reference: Reference to the image the descriptor came from

        Returns:
            Identifier of the new identity

        Raises:
            ValidationError: If the input is invalid or the dimension mismatches
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[IdentityRecord]:
        """
        List every enrolled identity in enrollment order.

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def delete(self, identity_id: int) -> bool:
        """
        Delete an enrolled identity.

        Args:
            identity_id: Identifier returned by ``enroll``

        Returns:
            True once the identity is removed

        Raises:
            NotFoundError: If no identity has this identifier
            StorageError: If the delete fails
        """
        pass
