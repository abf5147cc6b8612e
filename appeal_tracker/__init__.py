"""
Package marker for the appeal tracker service.
The HTTP application lives in `appeal_tracker.api.app`; shared settings and logging live in `appeal_tracker.common`.
"""
