# skill_taxonomy.py
# Central, read-only knowledge base of recognized skills.
# Keys are lowercase; values are the canonical display form used in all output.

from types import MappingProxyType
from typing import Dict, Optional

from cvmatch.models.models import SkillCategory, SkillEntry

_TAXONOMY_SOURCE = {
    SkillCategory.TECHNICAL: [
        "Java", "Python", "JavaScript", "TypeScript", "C++", "C#", "Go", "Rust",
        "Kotlin", "Swift", "PHP", "Ruby", "Scala", "Clojure", "Perl", "R",
        "MATLAB", "Dart", "Objective-C",
    ],
    SkillCategory.FRAMEWORK: [
        "React", "Angular", "Vue", "Spring", "Node.js", "Express", "Django",
        "Flask", "Laravel", "Symfony", "Ruby on Rails", "ASP.NET", "Bootstrap",
        "Tailwind", "jQuery", "Hibernate", "Struts", "Play Framework", "Quarkus",
        "Micronaut",
    ],
    SkillCategory.DATABASE: [
        "MySQL", "PostgreSQL", "MongoDB", "Oracle", "SQL Server", "SQLite",
        "Redis", "Cassandra", "Neo4j", "DynamoDB", "Elasticsearch", "InfluxDB",
        "CouchDB", "MariaDB",
    ],
    SkillCategory.CLOUD_PLATFORM: [
        "AWS", "Azure", "GCP", "Google Cloud", "Digital Ocean", "Heroku",
        "Vercel", "Netlify",
    ],
    SkillCategory.METHODOLOGY: [
        "Agile", "Scrum", "Kanban", "DevOps", "CI/CD", "TDD", "BDD",
        "Microservices", "SOA",
    ],
    SkillCategory.SOFT_SKILL: [
        "Leadership", "Communication", "Teamwork", "Problem Solving",
        "Critical Thinking", "Project Management", "Time Management",
        "Adaptability", "Creativity", "Collaboration",
    ],
}

SKILL_TAXONOMY: "MappingProxyType[str, SkillEntry]" = MappingProxyType({
    name.lower(): SkillEntry(canonical_name=name, category=category)
    for category, names in _TAXONOMY_SOURCE.items()
    for name in names
})

# Exceptions to "first letter upper, rest lower"
CAPITALIZATION_OVERRIDES: "MappingProxyType[str, str]" = MappingProxyType({
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "node.js": "Node.js",
    "nodejs": "Node.js",
    "ci/cd": "CI/CD",
    "html": "HTML",
    "css": "CSS",
    "sql": "SQL",
    "api": "API",
    "aws": "AWS",
    "gcp": "GCP",
})

# Well-known terms matched as whole words by the pattern pass
PATTERN_TERMS = (
    "java", "python", "javascript", "typescript", "react", "angular", "vue",
    "spring", "nodejs", "docker", "kubernetes", "aws", "azure", "gcp", "sql",
    "mongodb", "postgresql", "mysql", "git", "jenkins", "ci/cd", "agile",
    "scrum", "devops", "microservices", "api", "rest", "graphql", "html",
    "css", "sass", "less", "bootstrap", "tailwind", "maven", "gradle", "junit",
    "selenium", "cypress", "terraform", "ansible", "redis", "elasticsearch",
    "kafka", "rabbitmq", "nginx", "apache", "linux", "ubuntu", "centos",
    "windows", "macos",
)

# Used by the degraded extractor only
FALLBACK_SKILLS = (
    "Java", "Python", "JavaScript", "React", "Angular", "Spring", "Node.js",
    "SQL", "PostgreSQL", "MySQL", "MongoDB", "Docker", "Kubernetes",
    "AWS", "Azure", "Git", "Jenkins", "CI/CD", "Agile", "Scrum",
    "HTML", "CSS", "REST API", "Microservices", "Leadership", "Communication",
)

_TECHNICAL_CATEGORIES = frozenset({
    SkillCategory.TECHNICAL,
    SkillCategory.FRAMEWORK,
    SkillCategory.DATABASE,
    SkillCategory.CLOUD_PLATFORM,
})


_TECHNICAL_NAMES = frozenset(
    e.canonical_name for e in SKILL_TAXONOMY.values() if e.category in _TECHNICAL_CATEGORIES
)


def lookup(skill: str) -> Optional[SkillEntry]:
    if not skill:
        return None
    return SKILL_TAXONOMY.get(skill.strip().lower())


def is_known_skill(skill: str) -> bool:
    return lookup(skill) is not None


def is_technical_term(term: str) -> bool:
    """Known skill, or a longer term from the technical/framework/database/cloud subsets."""
    if is_known_skill(term):
        return True
    return len(term) > 2 and term in _TECHNICAL_NAMES


def all_canonical_names() -> Dict[str, str]:
    """lowercase -> canonical, in taxonomy declaration order"""
    return {key: entry.canonical_name for key, entry in SKILL_TAXONOMY.items()}


def canonicalize(skill: str) -> str:
    """
    Display form for a skill: capitalization override first, then the
    taxonomy's canonical name, else first letter upper and the rest lower.
    """
    if not skill or not skill.strip():
        return skill
    trimmed = skill.strip()
    key = trimmed.lower()

    override = CAPITALIZATION_OVERRIDES.get(key)
    if override is not None:
        return override

    entry = SKILL_TAXONOMY.get(key)
    if entry is not None:
        return entry.canonical_name

    return trimmed[:1].upper() + trimmed[1:].lower()
