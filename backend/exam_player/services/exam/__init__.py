"""Exam session domain services: timers, adaptive branching and scoring.

Pure(ish) logic imported by HTTP routes and socket handlers, keeping
transport concerns separated from the exam mechanics.
"""
