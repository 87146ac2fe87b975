"""
WorkTrack - Source Package

Employee work tracking: daily task plans, end-of-day reports,
and compliance review for administrators.

DESIGN PRINCIPLES:
1. Callers always hand the store complete records
2. Fail early on corrupted data, never mask it as "empty"
3. Edit limits are advisory and enforced by the submitting flow
4. Every significant action is audited
5. Persistence substrate is swappable
"""

__version__ = "1.0.0"
__author__ = "WorkTrack Team"
