"""
Admissions Module

Handles the student application form:
1. Two-step wizard (Student Details -> Guardian, Payment & Declarations)
2. Per-step validation with field-level errors
3. Draft save/restore through the session store
4. Photo and proof-of-payment attachments with previews
5. Submission with duplicate-submit protection

API Endpoints:
- GET  /admissions/schema - Form schema (grades, options, declarations)
- GET  /admissions/fees - Fee schedule
- POST /admissions/open - Open the form, restoring any saved draft
- PATCH /admissions/draft - Edit fields
- PUT/DELETE /admissions/attachments/{kind} - Manage attachments
- POST /admissions/continue, /back, /submit, /close - Wizard actions

Background Jobs (via APScheduler):
- evict_idle_application_sessions: closes forms idle past the session TTL
- release_stale_previews: releases orphaned attachment previews
"""

from .jobs import register_admissions_jobs
from .router import router

__all__ = ["router", "register_admissions_jobs"]
