"""Credential-related type definitions for Tresor"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ValidationResult:
    """Result of a password policy check"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
