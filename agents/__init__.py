"""
Agent interface and implementations for Hidden Stations.

This module provides:
- BaseAgent / RedAgent / BlueAgent: Abstract interfaces
- AssignmentAgent: Red planner maximising shots per token ("red_assignment")
- DeductionAgent: Blue layout inference ("blue_deduction")
- RedSimpleAgent / BlueSimpleAgent: Baselines ("red_simple", "blue_simple")
"""

from .base_agent import BaseAgent, BlueAgent, RedAgent, RedDecision
from .assignment_agent import AssignmentAgent
from .deduction_agent import DeductionAgent
from .simple_agents import BlueSimpleAgent, RedSimpleAgent
from .registry import AGENT_REGISTRY, register_agent, registered_agents, resolve_agent_class
from .spec import AgentSpec
from .factory import PreparedAgent, create_agent_from_spec, create_agents_for_scenario

__all__ = [
    "BaseAgent",
    "RedAgent",
    "BlueAgent",
    "RedDecision",
    "AssignmentAgent",
    "DeductionAgent",
    "RedSimpleAgent",
    "BlueSimpleAgent",
    "AGENT_REGISTRY",
    "register_agent",
    "registered_agents",
    "resolve_agent_class",
    "AgentSpec",
    "PreparedAgent",
    "create_agent_from_spec",
    "create_agents_for_scenario",
]
