"""Rule-based learning assistant that answers free-text questions."""
from skiloovate.models import Subject
from skiloovate.scoring import round_half_up

GREETING = (
    "Hello! I'm your AI learning assistant. I can help you improve your performance "
    "based on your test results. Ask me anything about aptitude, technical concepts, "
    "or study strategies!"
)

NO_TESTS_YET = (
    "You haven't taken any tests yet! I recommend starting with the Aptitude Assessment "
    "to evaluate your logical reasoning and problem-solving skills. "
    "Would you like some tips on how to prepare?"
)

APTITUDE_TIPS = """Here are personalized tips to improve your aptitude skills:

Time Management
- Practice solving problems under time constraints
- Learn mental math shortcuts

Focus Areas
- Number series and patterns
- Percentage and ratio problems
- Logical reasoning puzzles

Daily Practice
- Solve 5-10 aptitude questions daily
- Review incorrect answers thoroughly
- Time yourself on each question

Would you like me to explain any specific topic?"""

TECHNICAL_TIPS = """Here are personalized tips to improve your technical skills:

Core Concepts
- Master data structures (arrays, linked lists, trees)
- Understand algorithm complexity (Big O)
- Practice coding problems regularly

Hands-on Practice
- Build small projects to apply concepts
- Use online coding platforms like LeetCode
- Read and understand existing code

Study Strategy
- Focus on one topic at a time
- Write code by hand before typing
- Explain concepts out loud to reinforce learning

Which specific technical topic would you like help with?"""

STUDY_PLAN = """Here's a recommended weekly study plan:

Monday & Tuesday: Aptitude
- Number systems, percentages, ratios
- 30 mins theory + 30 mins practice

Wednesday & Thursday: Technical
- Data structures and algorithms
- 45 mins learning + 15 mins coding

Friday: Mock Tests
- Take practice assessments
- Review all incorrect answers

Weekend: Review & Relax
- Revisit weak areas
- Light revision only

Pro Tips:
- Study in 25-minute focused sessions (Pomodoro)
- Take regular breaks
- Track your progress weekly

Would you like a more detailed plan for any specific day?"""

APTITUDE_TOPICS = """For aptitude improvement, focus on these key areas:

Quantitative
- Percentages & Profit/Loss
- Time & Work problems
- Speed & Distance calculations
- Number series patterns

Logical Reasoning
- Syllogisms and deductions
- Blood relations
- Coding-decoding
- Direction sense

Quick Tips:
- Learn multiplication tables up to 20
- Memorize squares up to 30
- Practice fraction to decimal conversions

What specific aptitude topic would you like to explore?"""

TECHNICAL_TOPICS = """For technical skill improvement:

Programming Fundamentals
- Variables, data types, operators
- Control structures (if/else, loops)
- Functions and scope
- Object-Oriented Programming

Data Structures
- Arrays and strings
- Linked lists
- Stacks and queues
- Trees and graphs

Algorithms
- Searching (linear, binary)
- Sorting (bubble, merge, quick)
- Recursion basics
- Time complexity analysis

Which programming concept would you like me to explain in detail?"""

MOTIVATION = """Remember {name}, every expert was once a beginner!

You've Got This!
- Learning takes time - be patient with yourself
- Small daily progress adds up to big results
- Mistakes are learning opportunities, not failures

Focus on Growth
- Compare yourself only to yesterday's you
- Celebrate small wins along the way
- Take breaks when needed - rest is productive too

Success Stories
- Many successful professionals struggled initially
- Consistency beats intensity
- Your effort today builds tomorrow's skills

Keep pushing forward! What can I help you with today?"""

FALLBACK = """I'm here to help you improve! You can ask me about:

- Your performance analysis
- Study tips and strategies
- Aptitude concepts
- Technical topics
- Creating a study plan
- Specific problem-solving techniques

What would you like to know more about?"""


def _mean_percentage(results) -> int | None:
    if not results:
        return None
    total = sum(r.percentage for r in results)
    return round_half_up(total / len(results))


def history_stats(history) -> dict:
    """Averages of per-test percentages; each test weighs the same regardless of length."""
    aptitude = [r for r in history if r.subject == Subject.APTITUDE]
    technical = [r for r in history if r.subject == Subject.TECHNICAL]
    return {
        "count": len(history),
        "average": _mean_percentage(history) or 0,
        "aptitude": _mean_percentage(aptitude),
        "technical": _mean_percentage(technical),
    }


def _performance(stats: dict, user_name) -> str:
    if stats["count"] == 0:
        return NO_TESTS_YET
    response = f"Based on your {stats['count']} test(s), your average score is {stats['average']}%. "
    aptitude = stats["aptitude"]
    if aptitude is not None:
        response += f"\n\nAptitude: {aptitude}% - "
        if aptitude >= 70:
            response += "Excellent! Keep practicing to maintain this level."
        elif aptitude >= 50:
            response += "Good progress! Focus on time management and practice more complex problems."
        else:
            response += "Needs improvement. I suggest practicing basic arithmetic, percentages, and logical reasoning daily."
    technical = stats["technical"]
    if technical is not None:
        response += f"\n\nTechnical: {technical}% - "
        if technical >= 70:
            response += "Great understanding of technical concepts!"
        elif technical >= 50:
            response += "Solid foundation. Review data structures and algorithms regularly."
        else:
            response += "Focus on fundamentals - variables, loops, functions, and basic algorithms."
    return response


def weaker_subject(stats: dict) -> Subject:
    aptitude, technical = stats["aptitude"], stats["technical"]
    if aptitude is not None and technical is not None:
        return Subject.APTITUDE if aptitude < technical else Subject.TECHNICAL
    if aptitude is not None:
        return Subject.APTITUDE
    return Subject.TECHNICAL


def _improve(stats: dict, user_name) -> str:
    if weaker_subject(stats) is Subject.APTITUDE:
        return APTITUDE_TIPS
    return TECHNICAL_TIPS


def _motivation(stats: dict, user_name) -> str:
    return MOTIVATION.format(name=user_name or "friend")


# First matching rule wins, so order matters: "help" routes to tips before
# "study" or "aptitude" get a chance.
RULES = [
    (("performance", "how am i doing", "my score"), _performance),
    (("improve", "better", "tips", "help"), _improve),
    (("study", "plan", "schedule"), lambda stats, name: STUDY_PLAN),
    (("aptitude", "math", "logical"), lambda stats, name: APTITUDE_TOPICS),
    (("technical", "coding", "programming"), lambda stats, name: TECHNICAL_TOPICS),
    (("motivate", "discouraged", "hard"), _motivation),
]


def respond(utterance: str, history, user_name: str | None = None) -> str:
    text = utterance.lower()
    for keywords, build in RULES:
        if any(kw in text for kw in keywords):
            return build(history_stats(history), user_name)
    return FALLBACK
