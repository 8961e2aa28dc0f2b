"""Clipper — clamps a value into [min, max]."""

import logging
import math

import numpy as np

from primitives.params import ParamDef, ParamSchema, ParamType

log = logging.getLogger(__name__)

CLIPPER_PARAMS = ParamSchema([
    ParamDef("min", ParamType.FLOAT, -np.inf, label="Minimum"),
    ParamDef("max", ParamType.FLOAT, np.inf, label="Maximum"),
])


class Clipper:
    """Stateless clamp.

    Same result as min(max, max(min, x)) with NaN-propagating min/max:
    a NaN input or a NaN bound gives NaN. min > max is not checked; the
    output is then always max.

        clipper = Clipper(min=0.0, max=1.0)
        clipper.process(0.5)   # 0.5
        clipper.process(2.0)   # 1.0
        clipper.process(-1.0)  # 0.0
    """

    schema = CLIPPER_PARAMS

    def __init__(self, min: float = -np.inf, max: float = np.inf):
        self.min = -np.inf
        self.max = np.inf
        self.set(min=min, max=max)

    def set(self, **changes):
        """Replace any subset of min, max."""
        params = self.schema.validate(changes)
        self.min = params.get("min", self.min)
        self.max = params.get("max", self.max)
        self._nan_bound = math.isnan(self.min) or math.isnan(self.max)
        log.debug("clipper range [%s, %s]", self.min, self.max)

    def params(self) -> dict:
        return {"min": self.min, "max": self.max}

    def process(self, x: float) -> float:
        if self._nan_bound:
            return math.nan
        # comparisons with a NaN input are False, so NaN falls through
        if x < self.min:
            x = self.min
        if x > self.max:
            x = self.max
        return x
