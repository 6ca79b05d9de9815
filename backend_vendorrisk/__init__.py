"""
Backend VendorRisk — risk scoring and temporal comparison engine for
vendor risk management.

Turns weighted questionnaire responses into normalized risk scores, tiers
and per-framework compliance coverage, and compares point-in-time analysis
snapshots to classify a vendor's risk trend.
"""

__version__ = "0.1.0"
