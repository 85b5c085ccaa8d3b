"""TrustRank – Feature vocabularies.

Static enumerations of the categorical values the two-tower encoder
knows about. The position of a value inside its tuple is its one-hot /
multi-hot index, so reordering a vocabulary changes every encoded vector.
Values outside a vocabulary are ignored by the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


DEFAULT_INTENTIONS: Tuple[str, ...] = (
    "learnGrow",
    "connectShare",
    "buildCollaborate",
    "unwindChat",
)

DEFAULT_EXPERIENCE_LEVELS: Tuple[str, ...] = (
    "Intern",
    "Entry",
    "Mid",
    "Senior",
    "Exec",
)

DEFAULT_CAREER_STAGES: Tuple[str, ...] = (
    "earlyCareer",
    "midLevel",
    "manager",
    "director",
    "executive",
    "founder",
)

DEFAULT_INDUSTRIES: Tuple[str, ...] = (
    "Technology", "Software", "SaaS",
    "Finance", "FinTech", "Banking", "Investments",
    "Healthcare", "Medical Devices", "Biotech", "Pharma",
    "Education", "EdTech", "Training",
    "E-commerce", "Retail", "Consumer Goods",
    "Gaming", "Entertainment", "Media", "Content Creation",
    "Consulting", "Management Consulting", "Strategy Consulting",
    "Startup", "Entrepreneurship", "Venture Capital",
    "Enterprise", "B2B", "B2C",
    "Government", "Non-profit", "Social Impact",
    "Manufacturing", "Logistics", "Supply Chain",
)

DEFAULT_SKILLS: Tuple[str, ...] = (
    "Swift", "Python", "JavaScript", "TypeScript", "React", "Vue", "Angular",
    "iOS Development", "Android Development", "Web Development",
    "AI", "Machine Learning", "Deep Learning", "Data Science", "NLP",
    "Product Management", "Project Management", "Scrum", "Agile",
    "UX Design", "UI Design", "Interaction Design", "Visual Design",
    "DevOps", "Cloud Computing", "AWS", "Azure", "GCP",
    "Backend Development", "Frontend Development", "Full Stack",
    "Database Design", "SQL", "NoSQL",
    "Cybersecurity", "Blockchain", "Web3",
    "Marketing", "Growth Hacking", "SEO", "SEM",
    "Business Strategy", "Consulting", "Finance",
)

DEFAULT_HOBBIES: Tuple[str, ...] = (
    "Coffee Culture", "Photography", "Hiking", "Traveling", "Backpacking",
    "Reading", "Writing", "Blogging", "Podcasting",
    "Gaming", "Board Games", "Video Games",
    "Music", "Playing Instruments", "Concerts",
    "Cooking", "Baking", "Craft Beer", "Wine Tasting",
    "Fitness", "Yoga", "Meditation", "Running", "Cycling",
    "Art", "Painting", "Drawing", "Design",
    "Volunteering", "Social Impact", "Sustainability",
)

DEFAULT_VALUES: Tuple[str, ...] = (
    "Innovation", "Collaboration", "Curiosity", "Passion", "Growth",
    "Integrity", "Diversity", "Inclusion", "Equality",
    "Sustainability", "Environmental Impact", "Social Responsibility",
    "Excellence", "Quality", "Attention to Detail",
    "Work-Life Balance", "Wellbeing", "Mental Health",
    "Transparency", "Open Communication", "Trust",
)


@dataclass(frozen=True)
class FeatureVocabulary:
    """Allowed categorical values per profile field.

    Skills-to-learn and skills-to-teach share the ``skills`` vocabulary.
    """

    intentions: Tuple[str, ...] = DEFAULT_INTENTIONS
    experience_levels: Tuple[str, ...] = DEFAULT_EXPERIENCE_LEVELS
    career_stages: Tuple[str, ...] = DEFAULT_CAREER_STAGES
    industries: Tuple[str, ...] = DEFAULT_INDUSTRIES
    skills: Tuple[str, ...] = DEFAULT_SKILLS
    hobbies: Tuple[str, ...] = DEFAULT_HOBBIES
    values: Tuple[str, ...] = DEFAULT_VALUES

    def __post_init__(self) -> None:
        for name in (
            "intentions",
            "experience_levels",
            "career_stages",
            "industries",
            "skills",
            "hobbies",
            "values",
        ):
            entries = getattr(self, name)
            if len(set(entries)) != len(entries):
                raise ValueError(f"Vocabulary {name!r} contains duplicate entries")

    @property
    def feature_dimension(self) -> int:
        """Length of a feature vector encoded with this vocabulary."""

        return (
            len(self.intentions)
            + len(self.experience_levels)
            + len(self.career_stages)
            + len(self.industries)
            + len(self.skills) * 3
            + len(self.hobbies)
            + len(self.values)
            + 3
        )


DEFAULT_VOCABULARY = FeatureVocabulary()
