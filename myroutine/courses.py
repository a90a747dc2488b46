"""
Default course-code to course-title table (CSE department).

The table is read-only; parsers receive it (or a replacement) as a mapping
instead of reaching for a global.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


DEFAULT_COURSE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        # Level 1
        "ENG101": "Basic Functional English and English Spoken",
        "ENG102": "Writing and Comprehension",
        "MAT101": "Mathematics - I",
        "MAT102": "Mathematics-II: Calculus, Complex Variables and Linear Algebra",
        "CSE112": "Computer Fundamentals",
        "CSE113": "Programming and Problem Solving",
        "CSE114": "Programming and Problem Solving Lab",
        "CSE115": "Introduction to Biology and Chemistry for Computation",
        "CSE121": "Electrical Circuits",
        "CSE122": "Electrical Circuits Lab",
        "CSE123": "Data Structure",
        "CSE124": "Data Structure Lab",
        "PHY101": "Physics-I",
        "PHY102": "Physics - II",
        "PHY103": "Physics - II Lab",
        # Level 2
        "MAT211": "Engineering Mathematics",
        "CSE212": "Discrete Mathematics",
        "CSE213": "Algorithms",
        "CSE214": "Algorithms Lab",
        "CSE215": "Electronic Devices and Circuits",
        "CSE216": "Electronic Devices and Circuits Lab",
        "CSE221": "Object Oriented Programming",
        "CSE222": "Object Oriented Programming Lab",
        "CSE223": "Digital Logic Design",
        "CSE224": "Digital Logic Design Lab",
        "CSE225": "Data Communication",
        "CSE226": "Numerical Methods",
        "CSE227": "Systems Analysis and Design",
        "CSE228": "Theory of Computation",
        "BNS101": "Bangladesh Studies (History of Independence and Contemporary Issues)",
        "STA101": "Statistics and Probability",
        "AOL101": "Art of Living",
        # Level 3
        "CSE311": "Database Management System",
        "CSE312": "Database Management System Lab",
        "CSE313": "Compiler Design",
        "CSE314": "Compiler Design Lab",
        "CSE315": "Software Engineering",
        "CSE316": "Artificial Intelligence",
        "CSE317": "Microprocessor and Microcontrollers",
        "CSE321": "Computer Networks",
        "CSE322": "Computer Networks Lab",
        "CSE323": "Operating Systems",
        "CSE324": "Operating Systems Lab",
        "CSE325": "Instrumentation and Control",
        "CSE326": "Social and Professional Issues in Computing",
        "ACT327": "Financial and Managerial Accounting",
        "ECO426": "Engineering Economics",
        # Level 4
        "CSE411": "Computer Graphics",
        "CSE412": "Computer Graphics Lab",
        "CSE413": "Computer Architecture and Organization",
        "CSE498": "Capstone Project (Phase I)",
        "CSE499": "Capstone Project (Phase II)",
    }
)
