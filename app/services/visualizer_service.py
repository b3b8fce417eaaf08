"""Vehicle visualizer: AI image generation and the buyer's saved visuals."""

from __future__ import annotations

import logging
import re

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, ValidationError
from app.llm.orchestrator import LLMOrchestrator
from app.llm.prompt_templates.defaults import render_visual_prompts
from app.models import SavedVisual, User, UserRole, Vehicle
from app.services.base_service import BaseService
from app.utils.ids import new_id
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

DEFAULT_VISUAL_PROMPT = "Standard View"
_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


class VisualizerService(BaseService):
    def __init__(self, db: Session | None = None, orchestrator: LLMOrchestrator | None = None) -> None:
        super().__init__(db=db)
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> LLMOrchestrator:
        if self._orchestrator is None:
            self._orchestrator = LLMOrchestrator()
        return self._orchestrator

    def generate_vehicle_visuals(
        self,
        vehicle: Vehicle,
        context: str,
        modification: str | None = None,
        reference_image_b64: str | None = None,
    ) -> list[str]:
        """Render the vehicle in `context`; failed angles are dropped, total failure yields []."""
        reference = _DATA_URL_PREFIX.sub("", reference_image_b64) if reference_image_b64 else None
        prompts = render_visual_prompts(
            {
                "vehicle_name": vehicle.name,
                "visual_desc": vehicle.visual_desc,
                "context": sanitize_text(context, max_len=500),
                "modification": sanitize_text(modification, max_len=500),
            }
        )
        images = [self.orchestrator.generate_image(prompt, reference_image_b64=reference) for prompt in prompts]
        generated = [image for image in images if image]
        logger.info(
            "visualizer.generated",
            extra={"event": "visualizer.generated", "vehicle_id": vehicle.id, "images": len(generated)},
        )
        return generated

    def list_for_buyer(self, buyer_id: str) -> list[SavedVisual]:
        stmt = select(SavedVisual).where(SavedVisual.buyer_id == buyer_id).order_by(SavedVisual.created_at.desc())
        return list(self.db.scalars(stmt))

    def save(self, buyer: User, vehicle: Vehicle, image_url: str, prompt: str | None = None) -> SavedVisual:
        if not image_url:
            raise ValidationError("An image is required.")
        visual = SavedVisual(
            id=new_id(),
            buyer_id=buyer.id,
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.name,
            image_url=image_url,
            prompt=sanitize_text(prompt, max_len=1000) or DEFAULT_VISUAL_PROMPT,
        )
        self.db.add(visual)
        self.commit()
        self.db.refresh(visual)
        logger.info("visual.saved", extra={"event": "visual.saved", "visual_id": visual.id})
        return visual

    def delete(self, visual_id: str, actor: User) -> None:
        visual = self.get_or_raise(SavedVisual, visual_id, "Saved visual")
        if actor.role != UserRole.ADMIN and visual.buyer_id != actor.id:
            raise AuthorizationError("Saved visual belongs to another buyer.")
        self.db.delete(visual)
        self.commit()
        logger.info("visual.deleted", extra={"event": "visual.deleted", "visual_id": visual_id})
