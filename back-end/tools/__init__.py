from tools.notifications import CollectingNotifier, LoggingNotifier

__all__ = ["CollectingNotifier", "LoggingNotifier"]
