from tycoon.agents.base import Agent
from tycoon.agents.ai import AIAgent
from tycoon.agents.human import HumanAgent

__all__ = [
    "Agent",
    "AIAgent",
    "HumanAgent",
]
