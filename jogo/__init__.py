"""Terminal maze game with patrolling enemies, blinking traps and portals."""

__version__ = "0.1.0"