from resume_coach.ai.types import ChatMessage

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are a professional resume coach. "
    "Analyze the provided resume and give specific, actionable suggestions for improvement. "
    "Also provide a brief summary including the professional role/title of the candidate "
    "and your overall assessment of the resume. "
    "Return your response as a JSON object with: "
    "\"summary\" (object with \"professionalTitle\" string, \"overallAssessment\" string describing "
    "strengths and areas for improvement in 2-3 sentences), and \"suggestions\" array. "
    "Each suggestion should have: \"category\" (string), \"title\" (string), "
    "\"description\" (string), \"priority\" (high/medium/low), and \"status\" (pending)."
)


def build_suggestion_messages(resume_text: str) -> list[ChatMessage]:
    user = f"Please analyze this resume and provide improvement suggestions:\n\n{resume_text}"
    return [
        ChatMessage(role="system", content=SUGGESTIONS_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user),
    ]
