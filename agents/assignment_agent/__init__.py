from .assignment_agent import AssignmentAgent
from .matching import max_assignment

__all__ = ["AssignmentAgent", "max_assignment"]
