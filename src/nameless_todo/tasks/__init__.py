"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Snapshot) and deadline ordering
- task_codec.py: JSON snapshot format with timestamp fields
- task_store.py: TodoStore (add/toggle/delete, persistence, observers)
- countdown.py: urgency and remaining-time labels
- ticker.py: display clock that refreshes "now" every second
"""
