"""MinuteMind - personal task tracker with subtasks and a pomodoro timer."""

__version__ = "0.3.0"
