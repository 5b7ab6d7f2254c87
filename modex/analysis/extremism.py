"""
Extremism and moderation effort for opinion networks.

Extremism summarizes how far the population sits from a neutral
opinion: the Euclidean norm of the opinion vector divided by the
number of agents.

Moderating an agent brings its opinion to 0. The effort of doing so
grows with how extreme the agent is and shrinks with its receptivity:

    effort_i = ceil(|o_i| * (1 - r_i))

A strategy selects which agents get moderated (1) and which are left
alone (0). A strategy is only applicable when its total effort fits in
the network's resources.
"""

from typing import List, Sequence
import math

from ..errors import InsufficientResourcesError, InvalidStrategyError
from ..network.model import Agent, Network


SELECTED = 1
NOT_SELECTED = 0


def compute_extremism(network: Network) -> float:
    """
    Compute the extremism of a network.

    Only the agent list is read, so this can run on a network whose
    effort has not been computed yet. An empty network has extremism 0.
    """
    n = len(network.agents)
    if n == 0:
        return 0.0

    return math.sqrt(sum(agent.opinion ** 2 for agent in network.agents)) / n


def agent_effort(agent: Agent) -> float:
    """Effort needed to bring one agent's opinion to 0."""
    return float(math.ceil(abs(agent.opinion) * (1.0 - agent.receptivity)))


def all_selected_strategy(n: int) -> bytes:
    """Strategy that moderates every one of ``n`` agents."""
    return bytes([SELECTED]) * n


def validate_strategy(network: Network, strategy: Sequence[int]) -> None:
    """Raise InvalidStrategyError unless strategy is a 0/1 vector per agent."""
    if len(strategy) != len(network.agents):
        raise InvalidStrategyError(
            f"strategy has {len(strategy)} entries for {len(network.agents)} agents"
        )

    for index, choice in enumerate(strategy):
        if choice not in (SELECTED, NOT_SELECTED):
            raise InvalidStrategyError(
                f"strategy entry {index} is {choice!r}, expected 0 or 1"
            )


def compute_effort(network: Network, strategy: Sequence[int]) -> List[float]:
    """
    Compute the per-agent effort of applying a strategy.

    Args:
        network: Network whose agents and resources are used.
        strategy: One 0/1 entry per agent, in agent order.

    Returns:
        Effort per agent, aligned with ``network.agents``. Agents that
        are not selected contribute 0.

    Raises:
        InvalidStrategyError: The strategy does not fit the network.
        InsufficientResourcesError: The total effort exceeds the
            network's resources. The computed vector is kept on the
            exception.
    """
    validate_strategy(network, strategy)

    efforts = [
        agent_effort(agent) if choice == SELECTED else 0.0
        for agent, choice in zip(network.agents, strategy)
    ]

    total = sum(efforts)
    if total > network.resources:
        raise InsufficientResourcesError(efforts, total, network.resources)

    return efforts


def moderated_opinions(network: Network, strategy: Sequence[int]) -> List[int]:
    """Opinions after applying a strategy: selected agents drop to 0."""
    validate_strategy(network, strategy)
    return [
        0 if choice == SELECTED else agent.opinion
        for agent, choice in zip(network.agents, strategy)
    ]


def moderated_extremism(network: Network, strategy: Sequence[int]) -> float:
    """Extremism the network would have after applying a strategy."""
    opinions = moderated_opinions(network, strategy)
    moderated = Network(
        agents=[
            Agent(opinion=opinion, receptivity=agent.receptivity)
            for opinion, agent in zip(opinions, network.agents)
        ],
        resources=network.resources,
    )
    return compute_extremism(moderated)
