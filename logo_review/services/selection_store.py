from __future__ import annotations
from typing import List, Optional, Sequence

from logo_review.models.logo import LogoRecord


class SelectionStore:
    """
    Selection rules over a list of loaded logos.
    The reference logo (if any) is always selected; every operation returns
    a new list and leaves the input untouched.
    """

    def __init__(self, reference_logo_id: Optional[int] = None) -> None:
        self.reference_logo_id = reference_logo_id

    def _is_reference(self, logo_id: int) -> bool:
        return self.reference_logo_id is not None and logo_id == self.reference_logo_id

    def toggle(self, records: Sequence[LogoRecord], logo_id: int) -> List[LogoRecord]:
        if self._is_reference(logo_id):
            return list(records)
        out = list(records)
        for i, logo in enumerate(out):
            if logo.id == logo_id:
                out[i] = logo.model_copy(update={"selected": not logo.selected})
                break
        return out

    def select_all(self, records: Sequence[LogoRecord]) -> List[LogoRecord]:
        return [logo.model_copy(update={"selected": True}) for logo in records]

    def unselect_all(self, records: Sequence[LogoRecord]) -> List[LogoRecord]:
        return [
            logo.model_copy(update={"selected": self._is_reference(logo.id)})
            for logo in records
        ]

    # State right after a load or a successful submit
    pristine = unselect_all

    def selected_ids(self, records: Sequence[LogoRecord]) -> List[int]:
        return [logo.id for logo in records if logo.selected]

    def can_unselect_all(self, records: Sequence[LogoRecord]) -> bool:
        """False when unselecting would change nothing."""
        ids = self.selected_ids(records)
        if not ids:
            return False
        return not (len(ids) == 1 and self._is_reference(ids[0]))

    def reference_logo(self, records: Sequence[LogoRecord]) -> Optional[LogoRecord]:
        if self.reference_logo_id is None:
            return None
        return next((logo for logo in records if logo.id == self.reference_logo_id), None)
