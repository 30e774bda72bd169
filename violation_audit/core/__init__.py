"""
Core components for violation audits.

Contains:
- Data models (DiagnosticRecord, ViolationMatch, AuditResult, etc.)
- Violation matcher and audit scorer
- Source map lookup
- Audit runner
"""
