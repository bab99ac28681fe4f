"""Applicant intake — registration flow and payload conversions."""
