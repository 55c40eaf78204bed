"""Static question bank loaded from the packaged content catalog."""
import json
from pathlib import Path

from skiloovate.models import Difficulty, Question, Subject, TestInfo

CONTENT_DIR = Path(__file__).parent / "content"
DEFAULT_CATALOG = CONTENT_DIR / "questions.json"

_loaded: dict = {}


def read_catalog_file(file_path) -> dict:
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    elif suffix in (".yaml", ".yml"):
        import yaml
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raise ValueError(f"Unsupported catalog format: {path.name}")


def parse_catalog(data: dict) -> dict:
    """Build immutable questions (grouped by subject, catalog order kept) and test metadata."""
    questions = {subject: [] for subject in Subject}
    seen = set()
    for q in data.get("questions", []):
        if q["id"] in seen:
            raise ValueError(f"Duplicate question id in catalog: {q['id']}")
        seen.add(q["id"])
        question = Question(
            id=q["id"],
            prompt=q["prompt"],
            options=tuple(q["options"]),
            correct_option_index=int(q["correct_option_index"]),
            subject=q["subject"],
            difficulty=q["difficulty"],
        )
        questions[question.subject].append(question)
    tests = [
        TestInfo(
            id=t["id"],
            title=t["title"],
            description=t.get("description", ""),
            subject=Subject(t["subject"]),
            duration_minutes=int(t["duration_minutes"]),
            question_count=int(t["question_count"]),
            difficulty=Difficulty(t.get("difficulty", "medium")),
        )
        for t in data.get("tests", [])
    ]
    return {
        "questions": {subject: tuple(qs) for subject, qs in questions.items()},
        "tests": tests,
    }


def import_catalog(file_path) -> dict:
    """Parse an alternate catalog from a .json or .yaml file without caching it."""
    return parse_catalog(read_catalog_file(file_path))


def load_catalog(file_path=None) -> dict:
    """Load a catalog once per process and reuse it afterwards."""
    key = str(file_path or DEFAULT_CATALOG)
    if key not in _loaded:
        _loaded[key] = import_catalog(key)
    return _loaded[key]


def get_questions(subject: Subject, file_path=None) -> tuple:
    return load_catalog(file_path)["questions"][Subject(subject)]


def get_question(question_id: str, file_path=None) -> Question:
    for questions in load_catalog(file_path)["questions"].values():
        for q in questions:
            if q.id == question_id:
                return q
    raise KeyError(question_id)


def available_tests(file_path=None) -> list[TestInfo]:
    return list(load_catalog(file_path)["tests"])


def get_test(test_id: str, file_path=None) -> TestInfo | None:
    for test in load_catalog(file_path)["tests"]:
        if test.id == test_id:
            return test
    return None


def questions_for_test(test: TestInfo, file_path=None) -> tuple:
    return get_questions(test.subject, file_path)[: test.question_count]
