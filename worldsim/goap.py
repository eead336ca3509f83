"""Goal-oriented action planning by regressive A* search."""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Iterable, Optional

from worldsim.content import ActionDefinition
from worldsim.utility import Goal

_COST_PER_MISSING_FACT = 5.0


@dataclass
class WorldState:
    """A set of facts believed true."""

    facts: set[str] = field(default_factory=set)

    def has(self, fact: str) -> bool:
        """Whether ``fact`` holds."""
        return fact in self.facts

    def set(self, fact: str) -> None:
        """Make ``fact`` hold."""
        self.facts.add(fact)

    def remove(self, fact: str) -> None:
        """Make ``fact`` no longer hold."""
        self.facts.discard(fact)


def _satisfies(current: frozenset, required: frozenset) -> bool:
    return required <= current


def _heuristic(state: frozenset, target: frozenset) -> float:
    return len(target - state) * _COST_PER_MISSING_FACT


class GOAPPlanner:
    """Finds a sequence of actions that reaches a goal from a state."""

    def __init__(self, actions: Iterable[ActionDefinition]) -> None:
        self.actions = list(actions)

    def plan(
        self, current_state: WorldState, goal: Goal, max_iterations: int
    ) -> Optional[list[str]]:
        """Action ids in execution order, or None if no plan is found in time.

        Searches backwards from the goal: an action applies when one of its
        effects is still needed, and its preconditions become new needs.
        """
        current = frozenset(current_state.facts)
        counter = itertools.count()
        start = frozenset({goal.condition})
        open_set: list[tuple[float, int, float, frozenset, list[str]]] = [
            (0.0, next(counter), 0.0, start, [])
        ]
        closed: set[frozenset] = set()
        iterations = 0

        while open_set:
            _, _, cost, needs, actions = heapq.heappop(open_set)
            iterations += 1
            if iterations > max_iterations:
                return None
            if _satisfies(current, needs):
                return actions
            if needs in closed:
                continue
            closed.add(needs)

            for action in self.actions:
                if not any(effect in needs for effect in action.effects):
                    continue
                new_needs = (needs - set(action.effects)) | set(action.preconditions)
                new_cost = cost + action.base_cost
                heapq.heappush(
                    open_set,
                    (
                        new_cost + _heuristic(new_needs, current),
                        next(counter),
                        new_cost,
                        new_needs,
                        [action.id, *actions],
                    ),
                )

        return None