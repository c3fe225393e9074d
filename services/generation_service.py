import base64
import json
from dataclasses import dataclass
from pathlib import Path

import structlog
from sqlalchemy.orm import Session

from core.database import transaction
from core.exceptions import NotFoundError, UpstreamError
from models.flashcard import Flashcard, FlashcardSet
from models.image import Image
from repositories.flashcard_repo import FlashcardRepository
from repositories.flashcard_set_repo import FlashcardSetRepository
from repositories.image_repo import ImageRepository
from repositories.llm_interaction_repo import LLMInteractionRepository
from services.llm_client import LLMClient

logger = structlog.get_logger(__name__)

MODEL_OPTIONS = [
    {"id": "google/gemini-flash-1.5", "name": "Gemini Flash 1.5", "description": "Fast, good for most tasks"},
    {"id": "google/gemini-pro-1.5", "name": "Gemini Pro 1.5", "description": "More capable, slower"},
    {"id": "anthropic/claude-3.5-sonnet", "name": "Claude 3.5 Sonnet", "description": "Excellent reasoning"},
    {"id": "anthropic/claude-3-haiku", "name": "Claude 3 Haiku", "description": "Fast and affordable"},
    {"id": "openai/gpt-4o", "name": "GPT-4 Omni", "description": "OpenAI flagship model"},
    {"id": "openai/gpt-4o-mini", "name": "GPT-4 Omni Mini", "description": "Fast and cost-effective"},
]

RESPONSE_FORMAT = """{
  "title": "Brief title for this flashcard set",
  "description": "Optional description of what this covers",
  "flashcards": [
    {
      "question": "Clear, specific question",
      "answer": "Detailed, helpful answer"
    }
  ]
}"""

GUIDELINES = [
    "Create as many flashcards as needed to cover all the important content",
    "Questions should be clear and test understanding",
    "Answers should be complete but concise",
    "Cover key concepts, definitions, formulas, and important facts",
    "If there are math problems, include step-by-step solutions in answers",
    "Make questions progressively more challenging when appropriate",
    "Focus on what a student would need to know for homework/tests",
]


@dataclass
class GeneratedCard:
    question: str
    answer: str


@dataclass
class GeneratedDeck:
    title: str
    description: str | None
    flashcards: list[GeneratedCard]


def build_prompt(image_count: int, custom_instructions: str | None = None) -> str:
    if image_count > 1:
        prompt = (
            f"You will see {image_count} images below. These are all pages from the same homework or "
            f"study material. Please look at ALL {image_count} images carefully before creating flashcards.\n\n"
            "Create flashcards to help a student learn the content from ALL the images."
        )
    else:
        prompt = (
            "Analyze this homework/study material image and create flashcards "
            "to help a student learn the content."
        )

    if custom_instructions:
        prompt += f"\n\nSpecial Instructions: {custom_instructions}"

    guidelines = list(GUIDELINES)
    if image_count > 1:
        guidelines.append("Make sure to create flashcards from content in ALL images, not just the first one")
    if custom_instructions:
        guidelines.append("Follow the special instructions provided above")

    prompt += "\n\nPlease respond with a JSON object in this exact format:\n" + RESPONSE_FORMAT
    prompt += "\n\nGuidelines:\n" + "\n".join(f"- {line}" for line in guidelines)
    prompt += "\n\nReturn ONLY the JSON object, no other text."
    return prompt


def _card_text(value) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_flashcard_response(text: str) -> GeneratedDeck:
    """Decode a model reply that must consist of a single JSON object."""
    try:
        payload = json.loads(text.strip())
    except ValueError as exc:
        raise UpstreamError("Invalid JSON response from LLM") from exc
    if not isinstance(payload, dict):
        raise UpstreamError("Invalid JSON response from LLM")

    title = payload.get("title")
    cards = payload.get("flashcards")
    description = payload.get("description")
    if not isinstance(title, str) or not title.strip() or not isinstance(cards, list):
        raise UpstreamError("Invalid flashcard data structure")
    if description is not None and not isinstance(description, str):
        raise UpstreamError("Invalid flashcard data structure")

    parsed: list[GeneratedCard] = []
    for card in cards:
        if not isinstance(card, dict):
            raise UpstreamError("Invalid flashcard data structure")
        question = _card_text(card.get("question"))
        answer = _card_text(card.get("answer"))
        if question is None or answer is None:
            raise UpstreamError("Invalid flashcard data structure")
        parsed.append(GeneratedCard(question=question, answer=answer))

    return GeneratedDeck(title=title.strip(), description=(description or "").strip() or None, flashcards=parsed)


class GenerationService:
    def __init__(self, db: Session, llm: LLMClient, upload_dir: Path):
        self.db = db
        self.llm = llm
        self.upload_dir = Path(upload_dir)
        self.image_repo = ImageRepository(db)
        self.interaction_repo = LLMInteractionRepository(db)
        self.set_repo = FlashcardSetRepository(db)
        self.card_repo = FlashcardRepository(db)

    def image_path(self, image: Image) -> Path:
        return self.upload_dir / Path(image.filepath).name

    def _data_url(self, image_id: int) -> str:
        image = self.image_repo.get(image_id)
        if image is None:
            raise NotFoundError(f"Image not found: {image_id}")
        path = self.image_path(image)
        if not path.is_file():
            raise NotFoundError(f"Image file not found: {image_id}")
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        return f"data:{image.mime_type};base64,{encoded}"

    async def generate(
        self,
        *,
        image_ids: list[int],
        model: str,
        custom_instructions: str | None = None,
    ) -> tuple[FlashcardSet, list[Flashcard]]:
        self.llm.ensure_configured()

        image_urls = [self._data_url(image_id) for image_id in image_ids]
        prompt = build_prompt(len(image_ids), custom_instructions)

        log = logger.bind(model=model, image_ids=image_ids)
        log.info("flashcard_generation_requested")
        completion = await self.llm.complete(model=model, prompt=prompt, image_urls=image_urls)

        try:
            deck = parse_flashcard_response(completion.content)
        except UpstreamError:
            log.warning("flashcard_generation_unparseable", response=completion.content[:500])
            raise

        with transaction(self.db):
            interaction = self.interaction_repo.create(
                model=model,
                prompt=prompt,
                response=completion.content,
                image_ids=image_ids,
                tokens_used=completion.total_tokens,
                custom_instructions=custom_instructions,
            )
            flashcard_set = self.set_repo.create(
                title=deck.title,
                description=deck.description,
                llm_interaction_id=interaction.id,
            )
            self.card_repo.bulk_create(
                [
                    {
                        "set_id": flashcard_set.id,
                        "question": card.question,
                        "answer": card.answer,
                        "order_index": index,
                    }
                    for index, card in enumerate(deck.flashcards)
                ]
            )

        flashcards = self.card_repo.get_by_set_id(flashcard_set.id)
        log.info("flashcard_generation_completed", set_id=flashcard_set.id, cards=len(flashcards))
        return flashcard_set, flashcards
