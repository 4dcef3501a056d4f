"""
Frank — a conversational guide that helps students get through a task.

Frank listens to a short free-text turn, works out what kind of help the
person is asking for, and answers with exactly one proportionate response:
a mirror, at most one question, and a small set of next actions. When the
person is ready, Frank walks them through the task one step at a time.

Package layout (src/frank/):
  core/rules/     — frozen keyword/pattern vocabulary (RuleConfig)
  core/dialogue/  — classifier, answer detector, mode state machine, composer
  core/planner/   — task classification and step templates
  core/policy/    — content-policy short-circuit
  core/store/     — SQLite persistence for paused progress
  core/session/   — one ConversationSession per conversation
  cli/            — Click CLI entry point and terminal renderer
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
