"""
Data-access layer: parameterized SQL for companies and jobs.

Route handlers call these modules and never build SQL themselves.
"""

from app.crud import company, job

__all__ = ["company", "job"]
