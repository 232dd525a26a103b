from .deduction_agent import DeductionAgent, anomaly_detected

__all__ = ["DeductionAgent", "anomaly_detected"]
