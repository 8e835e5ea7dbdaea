"""
Base Schema Models for plan permits

This module defines the base classes that the EVM permit models inherit
from. It provides deterministic serialization and the minimal interface
shared by every signature and permit representation.

Core Classes:
    - CanonicalModel: Pydantic base model with canonical JSON serialization
    - BaseSignature: Abstract signature component model
    - BasePermit: Abstract signed-permit model

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from typing import Dict, Any
from abc import ABC

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical JSON serialization.

    The JSON output is deterministically ordered and whitespace-minimal, so
    two equal models always serialize to the same string. Integers are kept
    as JSON numbers, which matters for uint256 values such as the default
    ``deadline`` (``2**256 - 1``).

    Example:
        class MyModel(CanonicalModel):
            name: str
            value: int

        model = MyModel(name="test", value=123)
        model.to_canonical_json()  # '{"name":"test","value":123}'
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        """
        Convert model to a canonical JSON string (sorted keys, compact).

        Returns:
            str: JSON string with sorted keys and no extra whitespace.
        """
        data = self.model_dump(mode="json", by_alias=True)
        return json.dumps(
            data,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to dictionary representation.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump()


class BaseSignature(CanonicalModel, ABC):
    """
    Abstract base class for signature components.

    Concrete signature classes describe one signing standard and implement
    ``validate_format`` to check their components.

    Attributes:
        signature_type: The type of signature (e.g., "PlanPermit")
    """

    signature_type: str = Field(..., description="Type of signature (e.g., PlanPermit)")

    def validate_format(self) -> bool:
        """
        Validate the signature components.

        Returns:
            bool: True if signature format is valid.

        Raises:
            ValueError: If signature format is invalid with descriptive message.
        """
        raise NotImplementedError


class BasePermit(CanonicalModel, ABC):
    """
    Abstract base class for signed permits.

    A permit is a signed message that authorizes a spender to act on behalf
    of an owner without a prior on-chain transaction from the owner.

    Attributes:
        permit_type: Type of permit (e.g., "PlanPermit")
    """

    permit_type: str = Field(..., description="Type of permit (e.g., PlanPermit)")

    def validate_structure(self) -> bool:
        """
        Validate the permit structure and required fields.

        Returns:
            bool: True if permit structure is valid.

        Raises:
            ValueError: If permit structure is invalid with descriptive message.
        """
        raise NotImplementedError
