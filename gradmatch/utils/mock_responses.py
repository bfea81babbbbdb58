"""Canned AI payloads used when the AI backend is disabled or unavailable."""

import copy
from typing import Any

from gradmatch.models.recommendation import CVAnalysisResult, RecommendationSet
from gradmatch.utils.response_parser import normalize_recommendation_data

MOCK_UNIVERSITY_PAYLOAD: dict[str, Any] = {
    "universities": [
        {
            "name": "Stanford University",
            "program": "MS in Computer Science",
            "location": "Stanford, CA, USA",
            "match_score": 98,
            "category": "reach",
            "ranking": "#2 in Computer Science",
            "why_recommended": [
                "Your strong academic background aligns with their requirements",
                "Excellent research opportunities in AI/ML",
                "Strong industry connections in Silicon Valley",
            ],
            "concerns": [
                "Highly competitive (5% acceptance rate)",
                "Very expensive tuition",
            ],
            "website_url": "https://www.stanford.edu",
            "application_deadline": "December 15, 2026",
            "tuition_fee": "$58,080/year",
            "admission_requirements": {
                "gpa_requirement": "3.7+",
                "gre_requirement": "320+",
                "toefl_requirement": "100+",
                "ielts_requirement": "7.0+",
            },
            "research_areas": [
                "Artificial Intelligence",
                "Machine Learning",
                "Computer Vision",
            ],
            "faculty_highlights": ["Prof. Andrew Ng", "Prof. Fei-Fei Li"],
        },
        {
            "name": "University of Washington",
            "program": "MS in Computer Science",
            "location": "Seattle, WA, USA",
            "match_score": 85,
            "category": "target",
            "ranking": "#8 in Computer Science",
            "why_recommended": [
                "Good match for your GPA range",
                "Strong industry connections with Microsoft, Amazon",
                "Excellent research in systems and theory",
            ],
            "concerns": ["Competitive for out-of-state students"],
            "website_url": "https://www.washington.edu",
            "application_deadline": "December 31, 2026",
            "tuition_fee": "$42,000/year",
            "admission_requirements": {
                "gpa_requirement": "3.5+",
                "gre_requirement": "315+",
                "toefl_requirement": "92+",
                "ielts_requirement": "6.5+",
            },
            "research_areas": ["Systems", "Programming Languages", "Database Systems"],
            "faculty_highlights": ["Prof. Ed Lazowska", "Prof. Magdalena Balazinska"],
        },
        {
            "name": "University of California, Irvine",
            "program": "MS in Computer Science",
            "location": "Irvine, CA, USA",
            "match_score": 78,
            "category": "safety",
            "ranking": "#25 in Computer Science",
            "why_recommended": [
                "Your profile exceeds their typical requirements",
                "Good funding opportunities for research assistantships",
                "Strong program in software engineering",
            ],
            "concerns": ["Lower research ranking than other choices"],
            "website_url": "https://www.uci.edu",
            "application_deadline": "January 15, 2027",
            "tuition_fee": "$28,000/year",
            "admission_requirements": {
                "gpa_requirement": "3.2+",
                "gre_requirement": "310+",
                "toefl_requirement": "80+",
                "ielts_requirement": "6.0+",
            },
            "research_areas": [
                "Software Engineering",
                "Human-Computer Interaction",
                "Security",
            ],
            "faculty_highlights": ["Prof. Andre van der Hoek", "Prof. Crista Lopes"],
        },
    ],
    "analysis": {
        "total_matches": 3,
        "reach_schools": 1,
        "target_schools": 1,
        "safety_schools": 1,
        "primary_field": "Computer Science",
        "confidence_score": 85,
    },
}

MOCK_CV_ANALYSIS_PAYLOAD: dict[str, Any] = {
    "user_profile": {
        "academic_background": "Computer Science Bachelor's degree with strong technical foundation",
        "gpa": "3.7/4.0",
        "test_scores": {"gre": "320", "toefl": "105"},
        "research_experience": [
            "Machine Learning research project at university",
            "Internship at tech company focusing on AI applications",
        ],
        "work_experience": [
            "Software Engineer at startup (2 years)",
            "Teaching Assistant for Data Structures course",
        ],
        "skills": ["Python", "Java", "Machine Learning", "Data Analysis", "Research"],
        "research_interests": [
            "Artificial Intelligence",
            "Machine Learning",
            "Computer Vision",
        ],
    },
    "recommendations": {
        "strengths": [
            "Strong technical background with relevant work experience",
            "Good academic performance with research exposure",
            "Excellent test scores demonstrate academic readiness",
        ],
        "weaknesses": [
            "Limited publication record",
            "Could benefit from more research experience",
        ],
        "improvement_suggestions": [
            "Consider contributing to open-source projects",
            "Seek additional research opportunities",
            "Develop stronger statement of purpose",
        ],
        "recommended_programs": [
            "MS in Computer Science",
            "MS in Artificial Intelligence",
            "PhD in Machine Learning",
        ],
        "application_strategy": (
            "Apply to a balanced mix of reach, target, and safety schools. "
            "Focus on programs with strong AI/ML research groups."
        ),
    },
    "university_matches": [
        {
            "name": "Stanford University",
            "program": "MS in Computer Science",
            "location": "Stanford, CA, USA",
            "match_score": 85,
            "category": "reach",
            "ranking": "#2 in Computer Science",
            "why_recommended": [
                "Strong AI program matches your interests",
                "Excellent industry connections",
            ],
            "website_url": "https://www.stanford.edu",
        }
    ],
}

MOCK_CHAT_REPLY = (
    "I understand you're looking for guidance with your graduate school "
    "applications. I can help you with university recommendations, CV analysis, "
    "and application strategy. What would you like to explore?"
)


def mock_recommendation_set() -> RecommendationSet:
    """Return the canned three-school recommendation set (one per category)."""
    result = normalize_recommendation_data(copy.deepcopy(MOCK_UNIVERSITY_PAYLOAD))
    if result is None:
        raise RuntimeError("Mock university payload has no universities list")
    return result


def mock_cv_analysis() -> CVAnalysisResult:
    """Return the canned CV analysis."""
    return CVAnalysisResult(**copy.deepcopy(MOCK_CV_ANALYSIS_PAYLOAD))
