from .messaging_service import PushMessage, PushMessenger

__all__ = ['PushMessage', 'PushMessenger']
