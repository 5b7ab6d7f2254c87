"""
Network data model.

A network is an ordered list of agents plus a resource budget. The
derived fields (extremism and effort) are filled in by the parser
before a network is handed to anyone, so every Network that leaves
the parser is complete. Networks are frozen and hold tuples; a stored
network can be shared between threads without copying.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple
import json


OPINION_MIN = -128
OPINION_MAX = 127
RESOURCES_MAX = 2 ** 64 - 1


@dataclass(frozen=True)
class Agent:
    """
    One participant of the network.

    The opinion is a discrete stance stored in a signed 8-bit range;
    the receptivity weights how easily the agent is moved.
    """
    opinion: int
    receptivity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"opinion": self.opinion, "receptivity": self.receptivity}

    def to_line(self) -> str:
        """Format the agent as an input-format line."""
        # repr() gives the shortest string that reads back to the same float
        return f"{self.opinion},{self.receptivity!r}"


@dataclass(frozen=True)
class Network:
    """
    An immutable social-influence network.

    ``effort`` is aligned 1:1 with ``agents`` whenever the effort
    computation succeeded. When it failed, ``effort`` is empty and
    ``effort_error`` holds the reason.
    """
    agents: Tuple[Agent, ...] = ()
    resources: int = 0
    extremism: float = 0.0
    effort: Tuple[float, ...] = ()
    effort_error: Optional[str] = None

    def __post_init__(self):
        # Accept any iterable but always store tuples
        object.__setattr__(self, "agents", tuple(self.agents))
        object.__setattr__(self, "effort", tuple(self.effort))

    @property
    def agent_count(self) -> int:
        return len(self.agents)

    @property
    def opinions(self) -> List[int]:
        return [agent.opinion for agent in self.agents]

    @property
    def receptivities(self) -> List[float]:
        return [agent.receptivity for agent in self.agents]

    @property
    def total_effort(self) -> float:
        return sum(self.effort)

    @property
    def has_effort(self) -> bool:
        """True when effort was computed for every agent."""
        return self.effort_error is None and len(self.effort) == len(self.agents)

    def with_metrics(
        self,
        extremism: float,
        effort: Iterable[float],
        effort_error: Optional[str] = None,
    ) -> "Network":
        """Return a copy carrying the derived fields."""
        return replace(
            self,
            extremism=extremism,
            effort=tuple(effort),
            effort_error=effort_error,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "agents": [agent.to_dict() for agent in self.agents],
            "resources": self.resources,
            "extremism": self.extremism,
            "effort": list(self.effort),
        }
        if self.effort_error is not None:
            data["effort_error"] = self.effort_error
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_text(self) -> str:
        """Serialize agents and resources back to the input format."""
        lines = [str(len(self.agents))]
        lines.extend(agent.to_line() for agent in self.agents)
        lines.append(str(self.resources))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"Network(agents={len(self.agents)}, resources={self.resources}, "
            f"extremism={self.extremism:.4f})"
        )
