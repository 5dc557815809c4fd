"""
Positional vendor index for proposal comparison.

The model never sees stored identifiers, only "Vendor {i+1}: {name}" blocks.
VendorIndex is built once per comparison and is the only place positions are
turned back into proposals, so re-identification never depends on matching
names in model prose.
"""

import re
from typing import Iterator, Sequence

from ..models.comparison import VendorProposal

# "Vendor 2", "vendor  2", "VENDOR\n2"; \b stops "Vendor 1" matching inside "Vendor 12"
PLACEHOLDER_PATTERN = re.compile(r'\bvendor\s+(\d+)\b', re.IGNORECASE)


class VendorIndex:
    """Bidirectional map between 0-based prompt positions and vendor proposals."""

    def __init__(self, proposals: Sequence[VendorProposal]):
        self._entries: tuple[VendorProposal, ...] = tuple(proposals)
        self._by_proposal_id: dict[str, int] = {
            entry.proposal_id: position
            for position, entry in enumerate(self._entries)
            if entry.proposal_id is not None
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[VendorProposal]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[VendorProposal, ...]:
        return self._entries

    @property
    def display_names(self) -> list[str]:
        return [entry.display_name for entry in self._entries]

    def contains(self, position: object) -> bool:
        """True if position is an int (not bool) within [0, len)."""
        return (
            isinstance(position, int)
            and not isinstance(position, bool)
            and 0 <= position < len(self._entries)
        )

    def get(self, position: object) -> VendorProposal | None:
        """Proposal at position, or None when out of range."""
        if not self.contains(position):
            return None
        return self._entries[position]  # type: ignore[index]

    def position_of(self, proposal_id: str) -> int | None:
        """Position of the proposal with the given stored identifier."""
        return self._by_proposal_id.get(proposal_id)

    def substitute_placeholders(self, text: str | None) -> str | None:
        """
        Replace "Vendor N" placeholders with the display name at position N-1.

        Placeholders pointing outside the index are left as written.
        """
        if not text:
            return text

        def _replace(match: re.Match) -> str:
            entry = self.get(int(match.group(1)) - 1)
            return entry.display_name if entry else match.group(0)

        return PLACEHOLDER_PATTERN.sub(_replace, text)
