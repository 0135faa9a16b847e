# Copyright (c) Syntropy Systems
"""Pydantic models for memobench."""

from memobench.models.trial import PlotPoint, TrialParameters, TrialRecord

__all__ = ["PlotPoint", "TrialParameters", "TrialRecord"]
