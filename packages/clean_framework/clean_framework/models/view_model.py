"""Base class for view models consumed by UI builders."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ViewModel(BaseModel):
    """Immutable snapshot of the state a view renders.

    View models compare by value, so a presenter can skip a rebuild when the
    new snapshot equals the previous one. Subclasses declare typed fields:

        class ExampleViewModel(ViewModel):
            last_login: datetime
            login_count: int = 0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
