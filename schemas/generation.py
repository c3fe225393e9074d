from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemas.flashcard import FlashcardOut, FlashcardSetOut


class GenerateFlashcardsIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_ids: list[int] = Field(default_factory=list, alias="imageIds")
    image_id: int | None = Field(default=None, alias="imageId")
    model: str | None = None
    custom_instructions: str | None = Field(default=None, alias="customInstructions")

    @model_validator(mode="before")
    @classmethod
    def _wrap_single_image_id(cls, data):
        if isinstance(data, dict):
            ids = data.get("imageIds")
            if ids is not None and not isinstance(ids, list):
                data = {**data, "imageIds": [ids]}
        return data

    @model_validator(mode="after")
    def _require_images_and_model(self):
        if self.image_id is not None and not self.image_ids:
            self.image_ids = [self.image_id]
        if self.model is not None:
            self.model = self.model.strip()
        if not self.image_ids or not self.model:
            raise ValueError("Missing required fields: imageIds (or imageId), model")
        # one link per image; keep first-submitted order
        self.image_ids = list(dict.fromkeys(self.image_ids))
        if self.custom_instructions is not None:
            self.custom_instructions = self.custom_instructions.strip() or None
        return self


class GenerateFlashcardsOut(BaseModel):
    success: bool = True
    flashcard_set: FlashcardSetOut = Field(serialization_alias="flashcardSet")
    flashcards: list[FlashcardOut]


class RecentInstructionsOut(BaseModel):
    instructions: list[str]


class ModelOptionOut(BaseModel):
    id: str
    name: str
    description: str


class ModelListOut(BaseModel):
    models: list[ModelOptionOut]
