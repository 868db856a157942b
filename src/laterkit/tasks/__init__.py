"""
Deferred task subsystem.

Components:
- task_models.py: TaskState and callback type aliases
- later_task.py: LaterTask, the four-state deferred task
- adapters.py: now/immediate/microtask/timeout/idle/animation_frame
- later_api.py: spec parsing and the later() dispatch facade
"""
