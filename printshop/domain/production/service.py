"""Production service - Business logic for typesetting, proofs and processing options"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_work import (
    OrderItem,
    ProcessingOptions,
    Typesetting,
    TypesettingOption,
    TypesettingProof,
    TypesettingProofArtwork,
    WorkOrderItem,
)
from ...services.status_transitions import apply_status_change
from .repository import ProcessingOptionsRepository, TypesettingRepository
from .schemas import (
    ProcessingOptionsCreate,
    ProcessingOptionsFields,
    TypesettingCreate,
    TypesettingOptionCreate,
    TypesettingOptionUpdate,
    TypesettingProofCreate,
    TypesettingProofUpdate,
    TypesettingStatusUpdate,
    TypesettingUpdate,
)

logger = logging.getLogger(__name__)

TYPESETTING_FIELDS = {
    "approved": "approved",
    "cost": "cost",
    "dateIn": "date_in",
    "timeIn": "time_in",
    "plateRan": "plate_ran",
    "prepTime": "prep_time",
}

PROOF_FIELDS = {
    "proofNumber": "proof_number",
    "dateSubmitted": "date_submitted",
    "approved": "approved",
    "notes": "notes",
    "proofMethod": "proof_method",
}

PROCESSING_FIELDS = {
    "bindingType": "binding_type",
    "cutting": "cutting",
    "drilling": "drilling",
    "folding": "folding",
    "padding": "padding",
    "stitching": "stitching",
    "numberingColor": "numbering_color",
    "numberingStart": "numbering_start",
    "numberingEnd": "numbering_end",
    "other": "other",
}


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


def _check_parents(
    db: Session, order_item_id: Optional[int], work_order_item_id: Optional[int], label: str
) -> None:
    """Exactly one parent line item, and it must exist"""
    if (order_item_id is None) == (work_order_item_id is None):
        raise HTTPException(
            status_code=400,
            detail=f"{label} must belong to exactly one of an order item or a work order item",
        )
    if order_item_id is not None:
        if not db.query(OrderItem.id).filter(OrderItem.id == order_item_id).first():
            raise HTTPException(status_code=404, detail="Order item not found")
    elif not db.query(WorkOrderItem.id).filter(WorkOrderItem.id == work_order_item_id).first():
        raise HTTPException(status_code=404, detail="Work order item not found")


class TypesettingService:
    """Service layer for typesetting, its options and its proofs"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TypesettingRepository()

    # ------------------------------------------------------------------
    # Typesetting
    # ------------------------------------------------------------------

    def get_all(self) -> list[Typesetting]:
        return self.repo.get_all(self.db)

    def get_typesetting(self, typesetting_id: int) -> Typesetting:
        typesetting = self.repo.get_by_id(self.db, typesetting_id)
        if not typesetting:
            raise HTTPException(status_code=404, detail="Typesetting not found")
        return typesetting

    def get_by_order_item(self, order_item_id: int) -> list[Typesetting]:
        return self.repo.get_by_order_item(self.db, order_item_id)

    def get_by_work_order_item(self, work_order_item_id: int) -> list[Typesetting]:
        return self.repo.get_by_work_order_item(self.db, work_order_item_id)

    def create_typesetting(self, data: TypesettingCreate, user: User) -> Typesetting:
        _check_parents(self.db, data.orderItemId, data.workOrderItemId, "Typesetting")
        values = data.model_dump()
        typesetting = Typesetting(
            order_item_id=data.orderItemId,
            work_order_item_id=data.workOrderItemId,
            status=data.status.value,
            created_by_id=user.id,
            **{column: values[key] for key, column in TYPESETTING_FIELDS.items()},
        )
        self.db.add(typesetting)
        self.db.commit()
        logger.info(f"✅ Typesetting created: {typesetting.id}")
        return self.get_typesetting(typesetting.id)

    def update_typesetting(self, typesetting_id: int, data: TypesettingUpdate) -> Typesetting:
        typesetting = self.get_typesetting(typesetting_id)
        values = data.model_dump(exclude_unset=True)

        if "orderItemId" in values or "workOrderItemId" in values:
            order_item_id = values.pop("orderItemId", typesetting.order_item_id)
            work_order_item_id = values.pop("workOrderItemId", typesetting.work_order_item_id)
            _check_parents(self.db, order_item_id, work_order_item_id, "Typesetting")
            typesetting.order_item_id = order_item_id
            typesetting.work_order_item_id = work_order_item_id

        for key, value in values.items():
            setattr(typesetting, TYPESETTING_FIELDS[key], value)

        self.db.commit()
        return self.get_typesetting(typesetting.id)

    def update_status(
        self, typesetting_id: int, data: TypesettingStatusUpdate, user: User
    ) -> Typesetting:
        typesetting = self.get_typesetting(typesetting_id)
        apply_status_change(
            self.db, typesetting, "Typesetting", data.status, user, override=data.override
        )
        self.db.commit()
        return self.get_typesetting(typesetting.id)

    def delete_typesetting(self, typesetting_id: int) -> dict:
        typesetting = self.get_typesetting(typesetting_id)
        self.db.delete(typesetting)
        self.db.commit()
        logger.info(f"🗑️ Typesetting {typesetting_id} deleted")
        return {"message": "Typesetting deleted"}

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def get_options(self, typesetting_id: Optional[int] = None) -> list[TypesettingOption]:
        return self.repo.get_options(self.db, typesetting_id)

    def get_option(self, option_id: int) -> TypesettingOption:
        option = self.repo.get_option(self.db, option_id)
        if not option:
            raise HTTPException(status_code=404, detail="Typesetting option not found")
        return option

    def create_option(self, data: TypesettingOptionCreate) -> TypesettingOption:
        self.get_typesetting(data.typesettingId)
        option = TypesettingOption(
            typesetting_id=data.typesettingId, option=data.option, selected=data.selected
        )
        self.db.add(option)
        self.db.commit()
        self.db.refresh(option)
        return option

    def update_option(self, option_id: int, data: TypesettingOptionUpdate) -> TypesettingOption:
        option = self.get_option(option_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(option, key, value)
        self.db.commit()
        self.db.refresh(option)
        return option

    def delete_option(self, option_id: int) -> dict:
        self.db.delete(self.get_option(option_id))
        self.db.commit()
        return {"message": "Typesetting option deleted"}

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def get_proofs(self, typesetting_id: Optional[int] = None) -> list[TypesettingProof]:
        return self.repo.get_proofs(self.db, typesetting_id)

    def get_proof(self, proof_id: int) -> TypesettingProof:
        proof = self.repo.get_proof(self.db, proof_id)
        if not proof:
            raise HTTPException(status_code=404, detail="Typesetting proof not found")
        return proof

    def create_proof(self, data: TypesettingProofCreate, user: User) -> TypesettingProof:
        self.get_typesetting(data.typesettingId)
        values = data.model_dump(exclude={"artwork"})
        proof = TypesettingProof(
            typesetting_id=data.typesettingId,
            created_by_id=user.id,
            **{column: _enum_value(values[key]) for key, column in PROOF_FIELDS.items()},
        )
        proof.artwork = [
            TypesettingProofArtwork(file_url=art.fileUrl, description=art.description)
            for art in data.artwork
        ]
        self.db.add(proof)
        self.db.commit()
        logger.info(f"✅ Proof {proof.proof_number} added to typesetting {data.typesettingId}")
        return self.get_proof(proof.id)

    def update_proof(self, proof_id: int, data: TypesettingProofUpdate) -> TypesettingProof:
        proof = self.get_proof(proof_id)
        values = data.model_dump(exclude_unset=True, exclude={"artwork"})
        for key, value in values.items():
            setattr(proof, PROOF_FIELDS[key], _enum_value(value))

        if data.artwork is not None:
            proof.artwork = [
                TypesettingProofArtwork(file_url=art.fileUrl, description=art.description)
                for art in data.artwork
            ]

        self.db.commit()
        return self.get_proof(proof.id)

    def delete_proof(self, proof_id: int) -> dict:
        self.db.delete(self.get_proof(proof_id))
        self.db.commit()
        return {"message": "Typesetting proof deleted"}


class ProcessingOptionsService:
    """Service layer for bindery and finishing options"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProcessingOptionsRepository()

    def get_all(self) -> list[ProcessingOptions]:
        return self.repo.get_all(self.db)

    def get_options(self, options_id: int) -> ProcessingOptions:
        options = self.repo.get_by_id(self.db, options_id)
        if not options:
            raise HTTPException(status_code=404, detail="Processing options not found")
        return options

    def create_options(self, data: ProcessingOptionsCreate, user: User) -> ProcessingOptions:
        _check_parents(self.db, data.orderItemId, data.workOrderItemId, "Processing options")
        values = data.model_dump()
        options = ProcessingOptions(
            order_item_id=data.orderItemId,
            work_order_item_id=data.workOrderItemId,
            created_by_id=user.id,
            **{column: values[key] for key, column in PROCESSING_FIELDS.items()},
        )
        self.db.add(options)
        self.db.commit()
        self.db.refresh(options)
        return options

    def update_options(self, options_id: int, data: ProcessingOptionsFields) -> ProcessingOptions:
        options = self.get_options(options_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(options, PROCESSING_FIELDS[key], value)
        self.db.commit()
        self.db.refresh(options)
        return options

    def delete_options(self, options_id: int) -> dict:
        self.db.delete(self.get_options(options_id))
        self.db.commit()
        return {"message": "Processing options deleted"}
