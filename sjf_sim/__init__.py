"""
SJF simulator package.

Non-preemptive Shortest-Job-First CPU scheduling simulation with a small
command-line front end for entering workloads and viewing the results.
"""

from .scheduler import simulate, simulate_processes

__all__ = ["cli", "simulate", "simulate_processes"]
