"""
Shared test fixtures for gradmatch.
"""

import copy

import pytest

from gradmatch.models.recommendation import RecommendationEntry

CANONICAL_PAYLOAD = {
    "universities": [
        {
            "name": "Carnegie Mellon University",
            "program": "PhD in Machine Learning",
            "location": "Pittsburgh, PA, USA",
            "match_score": 91,
            "category": "reach",
            "ranking": "#1 in Machine Learning",
            "why_recommended": ["World-class ML department", "Strong funding"],
            "concerns": ["Very low acceptance rate"],
            "logo_url": "https://example.org/cmu.png",
            "website_url": "https://www.cmu.edu",
            "application_deadline": "December 10, 2026",
            "tuition_fee": "Fully funded",
            "admission_requirements": {
                "gpa_requirement": "3.8+",
                "gre_requirement": "Optional",
                "toefl_requirement": "100+",
                "ielts_requirement": "7.5+",
            },
            "research_areas": ["Deep Learning", "Statistical ML"],
            "faculty_highlights": ["Prof. Zico Kolter"],
        },
        {
            "name": "University of Michigan",
            "program": "MS in Computer Science and Engineering",
            "location": "Ann Arbor, MI, USA",
            "match_score": 80,
            "category": "target",
            "ranking": "#11 in Computer Science",
            "why_recommended": ["Broad systems research"],
            "concerns": [],
            "website_url": "https://umich.edu",
            "admission_requirements": {"gpa_requirement": "3.5+"},
            "research_areas": [],
            "faculty_highlights": [],
        },
    ],
    "analysis": {
        "total_matches": 2,
        "reach_schools": 1,
        "target_schools": 1,
        "safety_schools": 0,
        "primary_field": "Computer Science",
        "confidence_score": 70,
    },
}


@pytest.fixture
def canonical_payload() -> dict:
    """Return a fully specified recommendation payload in wire shape."""
    return copy.deepcopy(CANONICAL_PAYLOAD)


@pytest.fixture
def make_entry():
    """Factory for RecommendationEntry with sensible defaults."""

    def _make(program: str = "MS in Computer Science", category: str = "target", **kwargs):
        fields = {
            "name": "Test University",
            "program": program,
            "location": "Somewhere",
            "match_score": 80,
            "category": category,
        }
        fields.update(kwargs)
        return RecommendationEntry(**fields)

    return _make
