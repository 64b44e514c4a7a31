# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for LearnPath.

This package contains domain entities, collaborator interfaces and services
that encapsulate business logic. Services receive their repositories through
the constructor and never talk to the database directly.

Domains:
    content: Course ordering, lesson access gating and lesson/course progress.
    badge: Badge definitions, criterion counters, progress engine and reports.
"""
