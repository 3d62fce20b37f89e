from typing import List, Sequence
import logging
from langchain_core.exceptions import OutputParserException
from langchain_core.runnables import Runnable

from tripdiary.agents.base import BaseAgent
from tripdiary.models.optimization import OptimizationResult
from tripdiary.models.route import RecurringRoute
from tripdiary.repositories.base import ProviderConfigurationError

logger = logging.getLogger(__name__)

MIN_CRITERIA_LENGTH = 10


class RouteOptimizationError(Exception):
    """The language model could not produce route suggestions."""
    pass


class RouteOptimizerAgent(BaseAgent):
    """Suggests reordered waypoints for recurring routes."""

    def _setup_chain(self) -> Runnable:
        template = """
        You are an AI route optimization expert. Given a set of recurring routes and
        optimization criteria, suggest the most efficient routes.

        Here are the recurring routes:
        {routes}

        Optimization criteria: {criteria}

        Analyze these routes and suggest optimizations based on the criteria provided.
        Consider factors such as distance, travel time and potential obstacles.

        Return one entry per route with the optimized waypoints and a summary of the changes.
        The optimized waypoints must be addresses only, without any additional context.
        The route name must be the name of the route only, without any additional context.
        Include the original waypoints so users can see the route before optimization.

        {format_instructions}
        """
        return self._create_chain(
            template=template,
            input_variables=["routes", "criteria"],
            output_model=OptimizationResult,
        )

    @staticmethod
    def _format_routes(routes: Sequence[RecurringRoute]) -> str:
        lines: List[str] = []
        for route in routes:
            lines.append(f"Route name: {route.name}")
            lines.append(f"Waypoints: {' -> '.join(route.waypoints)}")
        return "\n".join(lines)

    async def process(self, routes: Sequence[RecurringRoute], criteria: str) -> OptimizationResult:
        criteria = criteria.strip()
        if len(criteria) < MIN_CRITERIA_LENGTH:
            raise ValueError(
                f"Optimization criteria must be at least {MIN_CRITERIA_LENGTH} characters long."
            )
        if not routes:
            return OptimizationResult(optimized_routes=[])

        logger.info(f"Requesting optimization suggestions for {len(routes)} routes")
        try:
            result = await self.chain.ainvoke(
                {"routes": self._format_routes(routes), "criteria": criteria}
            )
        except ProviderConfigurationError:
            raise
        except OutputParserException as e:
            logger.error(f"Could not parse optimization suggestions: {e}", exc_info=True)
            raise RouteOptimizationError(f"The model returned an unexpected answer: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error while optimizing routes: {e}", exc_info=True)
            raise RouteOptimizationError(f"Route optimization failed: {e}") from e

        logger.info(f"Received {len(result.optimized_routes)} route suggestions")
        return result
