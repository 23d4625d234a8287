"""Production repository - Database operations for typesetting and processing options"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models_work import (
    ProcessingOptions,
    Typesetting,
    TypesettingOption,
    TypesettingProof,
)


def _typesetting_query(db: Session):
    return db.query(Typesetting).options(
        selectinload(Typesetting.options),
        selectinload(Typesetting.proofs).selectinload(TypesettingProof.artwork),
    )


class TypesettingRepository:
    """Repository for typesetting, options and proofs"""

    @staticmethod
    def get_all(db: Session) -> list[Typesetting]:
        return _typesetting_query(db).order_by(Typesetting.id.desc()).all()

    @staticmethod
    def get_by_id(db: Session, typesetting_id: int) -> Optional[Typesetting]:
        return _typesetting_query(db).filter(Typesetting.id == typesetting_id).first()

    @staticmethod
    def get_by_order_item(db: Session, order_item_id: int) -> list[Typesetting]:
        return (
            _typesetting_query(db)
            .filter(Typesetting.order_item_id == order_item_id)
            .order_by(Typesetting.id)
            .all()
        )

    @staticmethod
    def get_by_work_order_item(db: Session, work_order_item_id: int) -> list[Typesetting]:
        return (
            _typesetting_query(db)
            .filter(Typesetting.work_order_item_id == work_order_item_id)
            .order_by(Typesetting.id)
            .all()
        )

    @staticmethod
    def get_options(db: Session, typesetting_id: Optional[int] = None) -> list[TypesettingOption]:
        query = db.query(TypesettingOption)
        if typesetting_id is not None:
            query = query.filter(TypesettingOption.typesetting_id == typesetting_id)
        return query.order_by(TypesettingOption.id).all()

    @staticmethod
    def get_option(db: Session, option_id: int) -> Optional[TypesettingOption]:
        return db.query(TypesettingOption).filter(TypesettingOption.id == option_id).first()

    @staticmethod
    def get_proofs(db: Session, typesetting_id: Optional[int] = None) -> list[TypesettingProof]:
        query = db.query(TypesettingProof).options(selectinload(TypesettingProof.artwork))
        if typesetting_id is not None:
            query = query.filter(TypesettingProof.typesetting_id == typesetting_id)
        return query.order_by(TypesettingProof.typesetting_id, TypesettingProof.proof_number).all()

    @staticmethod
    def get_proof(db: Session, proof_id: int) -> Optional[TypesettingProof]:
        return (
            db.query(TypesettingProof)
            .options(selectinload(TypesettingProof.artwork))
            .filter(TypesettingProof.id == proof_id)
            .first()
        )


class ProcessingOptionsRepository:
    """Repository for processing options"""

    @staticmethod
    def get_all(db: Session) -> list[ProcessingOptions]:
        return db.query(ProcessingOptions).order_by(ProcessingOptions.id.desc()).all()

    @staticmethod
    def get_by_id(db: Session, options_id: int) -> Optional[ProcessingOptions]:
        return db.query(ProcessingOptions).filter(ProcessingOptions.id == options_id).first()
