"""Vehicle inventory and per-vehicle insurance plans."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.database.seed import catalog_vehicles, seed_catalog
from app.models import DriveType, InsuranceType, UserRole, Vehicle
from app.services.base_service import BaseService
from app.utils.ids import new_id, new_plan_id
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

PRICE_HIGH_FACTOR = 1.1
_EDITABLE_FIELDS = (
    "name",
    "trim",
    "drive",
    "seats",
    "use_cases",
    "f_and_i",
    "image_url",
    "visual_desc",
    "contract_template",
)


def price_range_for(price: int) -> tuple[int, int]:
    return price, round(price * PRICE_HIGH_FACTOR)


class VehicleService(BaseService):
    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db=db)

    def get(self, vehicle_id: str) -> Vehicle:
        return self.get_or_raise(Vehicle, vehicle_id, "Vehicle")

    def list_vehicles(self, drive: DriveType | None = None, seller_id: str | None = None) -> list[Vehicle]:
        stmt = select(Vehicle)
        if drive is not None:
            stmt = stmt.where(Vehicle.drive == drive.value)
        if seller_id is not None:
            stmt = stmt.where(Vehicle.seller_id == seller_id)
        return list(self.db.scalars(stmt.order_by(Vehicle.created_at, Vehicle.id)))

    def resolve(self, vehicle_id: str) -> Vehicle:
        """Stored vehicle, or the unsaved catalog entry with that id."""
        vehicle = self.db.get(Vehicle, vehicle_id)
        if vehicle is not None:
            return vehicle
        for candidate in catalog_vehicles():
            if candidate.id == vehicle_id:
                return candidate
        raise NotFoundError(f"Vehicle not found: {vehicle_id}")

    def inventory(self) -> list[Vehicle]:
        """Stored vehicles, or the reference catalog when the store is empty."""
        vehicles = self.list_vehicles()
        if vehicles:
            return vehicles
        logger.info("inventory.catalog_fallback", extra={"event": "inventory.catalog_fallback"})
        return catalog_vehicles()

    def create(self, seller_id: str, data: dict[str, Any]) -> Vehicle:
        name = sanitize_text(data.get("name"), max_len=255)
        if not name:
            raise ValidationError("Vehicle name is required.")
        price = int(data.get("price") or 0)
        if price < 0:
            raise ValidationError("Price must be >= 0.")

        low, high = price_range_for(price)
        vehicle = Vehicle(
            id=new_id(),
            seller_id=seller_id,
            name=name,
            trim=sanitize_text(data.get("trim"), max_len=255),
            drive=DriveType(data.get("drive") or DriveType.FWD.value).value,
            seats=int(data.get("seats") or 5),
            price_low=low,
            price_high=high,
            use_cases=list(data.get("use_cases") or []),
            f_and_i=list(data.get("f_and_i") or []),
            image_url=data.get("image_url"),
            visual_desc=data.get("visual_desc"),
            contract_template=data.get("contract_template"),
            insurance_options=[],
        )
        self.db.add(vehicle)
        self.commit()
        self.db.refresh(vehicle)
        logger.info("vehicle.created", extra={"event": "vehicle.created", "vehicle_id": vehicle.id})
        return vehicle

    def update(self, vehicle_id: str, actor_id: str, actor_role: UserRole, data: dict[str, Any]) -> Vehicle:
        vehicle = self._owned(vehicle_id, actor_id, actor_role)
        for key in _EDITABLE_FIELDS:
            if key in data and data[key] is not None:
                value = data[key]
                if key == "drive":
                    value = DriveType(value).value
                setattr(vehicle, key, value)
        if data.get("price") is not None:
            vehicle.price_low, vehicle.price_high = price_range_for(int(data["price"]))
        self.commit()
        self.db.refresh(vehicle)
        logger.info("vehicle.updated", extra={"event": "vehicle.updated", "vehicle_id": vehicle.id})
        return vehicle

    def delete(self, vehicle_id: str, actor_id: str, actor_role: UserRole) -> None:
        vehicle = self._owned(vehicle_id, actor_id, actor_role)
        self.db.delete(vehicle)
        self.commit()
        logger.info("vehicle.deleted", extra={"event": "vehicle.deleted", "vehicle_id": vehicle_id})

    def add_insurance_plan(self, vehicle_id: str, actor_id: str, actor_role: UserRole, plan: dict[str, Any]) -> Vehicle:
        vehicle = self._owned(vehicle_id, actor_id, actor_role)
        record = {
            "id": plan.get("id") or new_plan_id(),
            "provider": sanitize_text(plan.get("provider"), max_len=255),
            "name": sanitize_text(plan.get("name"), max_len=255),
            "premium": int(plan.get("premium") or 0),
            "type": InsuranceType(plan.get("type") or InsuranceType.COMPREHENSIVE.value).value,
            "addons": list(plan.get("addons") or []),
            "coverage_details": sanitize_text(plan.get("coverage_details"), max_len=2000),
        }
        if not record["provider"] or not record["name"]:
            raise ValidationError("Insurance plans need a provider and a name.")
        # Reassign so the JSON column is flagged dirty.
        vehicle.insurance_options = [*vehicle.insurance_options, record]
        self.commit()
        self.db.refresh(vehicle)
        return vehicle

    def remove_insurance_plan(self, vehicle_id: str, actor_id: str, actor_role: UserRole, plan_id: str) -> Vehicle:
        vehicle = self._owned(vehicle_id, actor_id, actor_role)
        remaining = [plan for plan in vehicle.insurance_options if plan.get("id") != plan_id]
        if len(remaining) == len(vehicle.insurance_options):
            raise NotFoundError(f"Insurance plan not found: {plan_id}")
        vehicle.insurance_options = remaining
        self.commit()
        self.db.refresh(vehicle)
        return vehicle

    def seed(self) -> int:
        return seed_catalog(self.db)

    def _owned(self, vehicle_id: str, actor_id: str, actor_role: UserRole) -> Vehicle:
        vehicle = self.get(vehicle_id)
        if actor_role == UserRole.ADMIN:
            return vehicle
        # Catalog vehicles have no owner and are editable by any seller.
        if vehicle.seller_id not in (None, actor_id):
            raise AuthorizationError("Vehicle belongs to another seller.")
        return vehicle
