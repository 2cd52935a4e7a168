"""Visit result domain model."""

from pydantic import BaseModel, ConfigDict

from visit_counter.domain.models.visitor_record import VisitorRecord


class VisitResult(BaseModel):
    """Outcome of recording or looking up a visit.

    ``created`` is True when the record did not exist before the call.
    """

    model_config = ConfigDict(frozen=True)

    record: VisitorRecord
    created: bool
