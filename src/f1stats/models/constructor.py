"""Constructor model, derived by grouping drivers on team name."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from f1stats.models.driver import Driver

DEFAULT_TEAM_COLOUR = "000000"


class Constructor(BaseModel):
    """A team and the drivers listed under it, in roster order."""

    model_config = ConfigDict(frozen=True)

    name: str
    colour: str = DEFAULT_TEAM_COLOUR
    drivers: tuple[Driver, ...] = ()
