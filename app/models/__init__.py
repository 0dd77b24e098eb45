from .user import User
from .problem import Problem
from .submission import Submission

__all__ = [
    'User',
    'Problem',
    'Submission',
]
