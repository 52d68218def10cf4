"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Fields are checked for type only; value rules (time format, weekday range,
non-negative counts) belong to the Reminder entity and come back as
VALIDATION_ERROR with status 400.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class CreateReminderRequest(BaseModel):
    """Request to create a reminder.

    Accepts snake_case or the camelCase names used by exports.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: StrictStr = Field(..., description="Medication name", examples=["Aspirin"])
    time: StrictStr = Field(..., description="Time of day, HH:MM", examples=["08:00"])
    notes: StrictStr | None = Field(default=None, description="Free-text notes")
    dosage: StrictInt = Field(default=1, description="Doses taken per dismiss")
    stock: StrictInt = Field(default=0, description="Doses remaining")
    repeat_days: list[StrictInt] = Field(
        default_factory=list,
        description="Weekdays to repeat on, Sunday=0. Empty for a one-time reminder.",
        examples=[[1, 3, 5]],
    )
    snooze_duration: StrictInt = Field(default=5, description="Snooze length in minutes")
    color: StrictStr = Field(default="#4a90d9", description="Display color tag")

    def to_spec(self) -> dict:
        """Field mapping for ReminderStore.add."""
        return self.model_dump(exclude_none=True)
