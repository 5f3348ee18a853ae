RECOMMENDATION_PROMPT = """Based on the job analysis for "{job_title}", the top candidate is {name} with a match score of {score:.1f}%.

Job Requirements:
- Title: {job_title}
- Required Skills: {required_skills}
- Experience Level: {experience_level}
- Education: {education}

Top Candidate Highlights:
- {highlights}

Please provide a brief professional recommendation (2-3 sentences) about this candidate for this role.
"""

FALLBACK_RECOMMENDATION = "{name} is the top candidate with a {score:.1f}% match score based on the analysis criteria."

NO_CANDIDATES_MESSAGE = "No candidates found in the database."

NOT_SPECIFIED = "Not specified"
NO_HIGHLIGHTS = "No highlights"
