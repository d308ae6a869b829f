# Planner Package
# Target resolution, loop bodies and node ordering

from .scheduler import CompileTarget, LoopPlan, Schedule, schedule, topological_order

__all__ = ['CompileTarget', 'LoopPlan', 'Schedule', 'schedule', 'topological_order']
