"""LearnPath Backend.

Learning-management core: sequential lesson access, course progress and
student badge progress for institutions, courses and enrollments.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
