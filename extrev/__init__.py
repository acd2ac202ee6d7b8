"""ExtRev - consultant, client and consult management backend"""

__version__ = "0.1.0"
