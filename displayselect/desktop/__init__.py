"""Desktop command adapters: picker, notifier, manual arranger, hooks."""
