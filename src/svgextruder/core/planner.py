"""Detail level planning from shape analysis.

Turns a ShapeAnalysis into concrete tessellation and extrusion settings.
More geometric detail in the source earns proportionally more tessellation
budget, but every value is clamped so adversarial input (thousands of tiny
curves) cannot produce runaway vertex counts.

The constants come from DetailConfig and are tunable, not physical.
"""

import math

import structlog

from svgextruder.config import DetailConfig
from svgextruder.domain import DetailLevel, DetailRung, DetailSettings, ShapeAnalysis
from svgextruder.exceptions import InvalidBudgetError

logger = structlog.get_logger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


class DetailLevelPlanner:
    """Chooses curve resolution and extrusion parameters for an outline.

    Example:
        planner = DetailLevelPlanner()
        settings = planner.plan(analysis, target_vertex_budget=50_000)
        ladder = planner.plan_ladder(analysis)
    """

    def __init__(self, config: DetailConfig | None = None) -> None:
        """Initialize the planner.

        Args:
            config: Planning constants (defaults if None)
        """
        self.config = config or DetailConfig()

    def optimal_settings(self, analysis: ShapeAnalysis) -> DetailSettings:
        """Settings for the Medium rung.

        Args:
            analysis: Analysis of the outline to extrude

        Returns:
            Base DetailSettings the other rungs scale from
        """
        cfg = self.config
        score = analysis.complexity_score
        curves = analysis.curve_command_count
        heavy = curves > cfg.heavy_bevel_curve_threshold

        return DetailSettings(
            curve_resolution=int(
                clamp(math.floor(score / cfg.resolution_divisor), cfg.min_resolution, cfg.max_resolution)
            ),
            extrude_depth=float(
                clamp(analysis.diagonal_length / cfg.depth_divisor, cfg.min_extrude_depth, cfg.max_extrude_depth)
            ),
            bevel_enabled=curves > cfg.bevel_curve_threshold,
            bevel_thickness=cfg.heavy_bevel_thickness if heavy else cfg.light_bevel_thickness,
            bevel_size=cfg.heavy_bevel_size if heavy else cfg.light_bevel_size,
            bevel_segments=int(clamp(curves // 2, cfg.min_bevel_segments, cfg.max_bevel_segments)),
            depth_steps=int(
                clamp(math.floor(score / cfg.steps_divisor), cfg.min_depth_steps, cfg.max_depth_steps)
            ),
        )

    def settings_for_level(self, base: DetailSettings, level: DetailLevel) -> DetailSettings:
        """Scale base settings to a ladder rung.

        Resolution is re-clamped to the global ceiling; depth steps scale
        with the same multiplier but never drop below one.
        """
        resolution = math.floor(base.curve_resolution * level.multiplier)
        resolution = max(1, min(resolution, self.config.resolution_ceiling))
        steps = max(1, math.floor(base.depth_steps * level.multiplier))

        return DetailSettings(
            curve_resolution=resolution,
            extrude_depth=base.extrude_depth,
            bevel_enabled=base.bevel_enabled,
            bevel_thickness=base.bevel_thickness,
            bevel_size=base.bevel_size,
            bevel_segments=base.bevel_segments,
            depth_steps=steps,
            bevel_offset=base.bevel_offset,
        )

    def plan_ladder(self, analysis: ShapeAnalysis) -> list[DetailRung]:
        """Progressive Low, Medium, High and Ultra settings.

        Returns:
            Rungs ordered from lowest to highest detail
        """
        base = self.optimal_settings(analysis)
        return [
            DetailRung(level=level, settings=self.settings_for_level(base, level))
            for level in sorted(DetailLevel, key=lambda lvl: lvl.rank)
        ]

    def estimate_vertex_count(self, analysis: ShapeAnalysis, settings: DetailSettings) -> int:
        """Rough vertex count of the extruded solid.

        Every curve contributes ``curve_resolution`` contour vertices on top
        of the outline's own points; each depth step and each bevel segment
        on both caps adds one more ring of contour vertices.
        """
        contour = analysis.point_count + analysis.curve_command_count * settings.curve_resolution
        layers = settings.depth_steps + 1
        if settings.bevel_enabled:
            layers += 2 * settings.bevel_segments
        return contour * layers

    def plan(self, analysis: ShapeAnalysis, target_vertex_budget: int | None = None) -> DetailSettings:
        """Pick the most detailed rung that fits a vertex budget.

        Args:
            analysis: Analysis of the outline to extrude
            target_vertex_budget: Maximum estimated vertices (config default
                if None)

        Returns:
            Settings of the highest fitting rung, or the Low rung when none fit

        Raises:
            InvalidBudgetError: If the budget is below 1
        """
        budget = self.config.default_vertex_budget if target_vertex_budget is None else target_vertex_budget
        if budget < 1:
            raise InvalidBudgetError(budget)

        ladder = self.plan_ladder(analysis)
        for rung in reversed(ladder):
            estimate = self.estimate_vertex_count(analysis, rung.settings)
            if estimate <= budget:
                logger.debug(
                    "Detail level chosen",
                    level=rung.level.name,
                    estimate=estimate,
                    budget=budget,
                )
                return rung.settings

        logger.debug("No detail level fits budget, using lowest", budget=budget)
        return ladder[0].settings
