"""Exam subjects and their topic lists."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TopicGroup:
    level: str
    topics: tuple[str, ...]
    recommended_experience: str | None = None


@dataclass(frozen=True)
class Subject:
    name: str
    exam: str  # how the question prompt names the exam
    groups: tuple[TopicGroup, ...]
    extra_topics: tuple[str, ...] = field(default=())

    @property
    def topics(self) -> list[str]:
        """Dashboard topics, in display order."""
        return [t for g in self.groups for t in g.topics]

    def accepts(self, topic: str) -> bool:
        return topic in self.topics or topic in self.extra_topics


INSURANCE_MATH_TOPICS = (
    "Math Calculations",
    "Premium & Cancellation Calculations",
    "Deductibles & Loss Settlements",
    "Depreciation & Actual Cash Value (ACV)",
    "Coinsurance Clause Calculations",
    "Liability Limits and Split Limits",
    "Business Interruption Insurance",
    "Workers’ Compensation & Experience Rating",
    "Time and Proration Calculations",
    "Endorsements & Coverage Limits",
    "Inland Marine/Equipment Floaters",
    "Surety & Bonds",
    "Miscellaneous",
)

SUBJECTS = (
    Subject(
        name="Insurance Exam",
        exam="Texas Property & Casualty exam",
        groups=(
            TopicGroup(
                level="Default",
                topics=(
                    "Risk Management",
                    "Property Insurance",
                    "Casualty Insurance",
                    "Texas Insurance Law",
                    "Policy Provisions",
                    "Underwriting",
                    "Claims Handling",
                    "Ethics & Regulations",
                ),
            ),
        ),
        extra_topics=INSURANCE_MATH_TOPICS,
    ),
    Subject(
        name="AWS Certifications",
        exam="AWS certification exam",
        groups=(
            TopicGroup(
                level="Foundational",
                recommended_experience="6 months",
                topics=("AWS Certified Cloud Practitioner",),
            ),
            TopicGroup(
                level="Associate",
                recommended_experience="1 year",
                topics=(
                    "AWS Certified Solutions Architect – Associate",
                    "AWS Certified Developer – Associate",
                    "AWS Certified SysOps Administrator – Associate",
                ),
            ),
            TopicGroup(
                level="Professional",
                recommended_experience="2+ years",
                topics=(
                    "AWS Certified Solutions Architect – Professional",
                    "AWS Certified DevOps Engineer – Professional",
                ),
            ),
            TopicGroup(
                level="Specialty",
                recommended_experience="Deep technical expertise",
                topics=(
                    "AWS Certified Advanced Networking – Specialty",
                    "AWS Certified Data Analytics – Specialty",
                    "AWS Certified Database – Specialty",
                    "AWS Certified Machine Learning – Specialty",
                    "AWS Certified Security – Specialty",
                    "AWS Certified SAP on AWS – Specialty",
                ),
            ),
        ),
    ),
    Subject(
        name="Tax Professional Training",
        exam="federal tax preparer exam",
        groups=(
            TopicGroup(
                level="Federal Core",
                topics=(
                    "Introduction to Tax Preparation",
                    "Filing Basics & Taxpayer Info",
                    "Income Reporting",
                    "Adjustments and Deductions",
                    "Tax Credits",
                    "Small Business & Self-Employed Taxes",
                    "Ethics & Circular 230",
                    "IRS Procedures & Representation",
                    "Practice Lab",
                    "Final Exam & Certification",
                ),
            ),
        ),
    ),
)

SUBJECTS_BY_NAME = {s.name: s for s in SUBJECTS}


def get_subject(name: str | None) -> Subject | None:
    if not name:
        return None
    return SUBJECTS_BY_NAME.get(name.strip())


def subject_for_topic(topic: str) -> Subject | None:
    """Return the first subject that accepts ``topic``."""
    for subject in SUBJECTS:
        if subject.accepts(topic):
            return subject
    return None
