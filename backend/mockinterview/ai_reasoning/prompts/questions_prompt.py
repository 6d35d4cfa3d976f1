def build_questions_prompt(role: str, level: str, techstack: str, interview_type: str, amount: int) -> str:
    """
    Prompt for the question generator. The model must answer with a bare
    JSON array of strings; the caller parses it as-is.
    """

    return f"""
Prepare questions for a job interview based on the specified type.

Job Role: {role}
Experience Level: {level}
Tech Stack: {techstack}
Interview Type: {interview_type}
Number of Questions: {amount}

IMPORTANT: Generate questions based on the interview type:

- If type is "Technical": Generate ONLY technical questions related to programming, algorithms, system design, and the specified tech stack ({techstack}). NO behavioral questions.

- If type is "Behavioral": Generate ONLY behavioral questions about teamwork, leadership, problem-solving, past experiences, and soft skills. NO technical questions.

- If type is "Mixed": Generate a balanced mix of technical and behavioral questions (roughly 50% each).

Examples:
- Technical questions: "Explain how you would implement a binary search tree", "What are the differences between REST and GraphQL APIs?"
- Behavioral questions: "Tell me about a time you had to resolve a conflict with a team member", "How do you handle tight deadlines?"

The questions are going to be read by a voice assistant, so do not use "/" or "*" or any other special characters which might break the voice assistant.

Return ONLY the questions in this exact format:
["Question 1", "Question 2", "Question 3"]

Do not include any explanations or additional text.
"""
