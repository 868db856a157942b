"""
Scheduling backends.

- loop.py: now, microtask, immediate and timer backends on an asyncio loop
- idle.py: IdleQueue (idle-callback queue) and IdleBackend
- frames.py: FrameClock (redraw clock) and FrameBackend
"""
