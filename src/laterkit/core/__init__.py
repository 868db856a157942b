"""
Core seams.

- ports.py: Backend and Host protocols
- host.py: LoopHost (asyncio) and the per-loop host registry
"""
