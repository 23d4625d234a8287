"""
Line item copy helpers
Used when an order is duplicated and when a work order becomes an order
"""

from typing import Optional

from ..models_work import (
    ProcessingOptions,
    Typesetting,
    TypesettingOption,
    TypesettingProof,
    TypesettingProofArtwork,
)
from ..statuses import TypesettingStatus

ITEM_COLUMNS = (
    "product_type_id",
    "description",
    "quantity",
    "cost",
    "amount",
    "shipping_amount",
    "ink",
    "size",
    "other",
    "special_instructions",
    "expected_date",
)

STOCK_COLUMNS = (
    "paper_product_id",
    "stock_qty",
    "stock_status",
    "cost_per_m",
    "total_cost",
    "supplier",
    "supplied_from",
    "notes",
    "ordered_date",
    "expected_date",
    "received",
    "received_date",
)

PROCESSING_COLUMNS = (
    "binding_type",
    "cutting",
    "drilling",
    "folding",
    "padding",
    "stitching",
    "numbering_color",
    "numbering_start",
    "numbering_end",
    "other",
)


def _columns(source, names) -> dict:
    return {name: getattr(source, name) for name in names}


def item_fields(item) -> dict:
    return _columns(item, ITEM_COLUMNS)


def copy_artwork(artwork, artwork_model) -> list:
    return [artwork_model(file_url=a.file_url, description=a.description) for a in artwork]


def copy_stocks(stocks, stock_model, created_by_id: Optional[int]) -> list:
    return [
        stock_model(created_by_id=created_by_id, **_columns(stock, STOCK_COLUMNS))
        for stock in stocks
    ]


def copy_processing_options(options, created_by_id: Optional[int]) -> list[ProcessingOptions]:
    return [
        ProcessingOptions(created_by_id=created_by_id, **_columns(o, PROCESSING_COLUMNS))
        for o in options
    ]


def copy_typesetting(typesetting: Typesetting, created_by_id: Optional[int]) -> Typesetting:
    """Fresh typesetting round: back to InProgress, nothing approved"""
    return Typesetting(
        approved=False,
        cost=typesetting.cost,
        date_in=typesetting.date_in,
        time_in=typesetting.time_in,
        plate_ran=typesetting.plate_ran,
        prep_time=typesetting.prep_time,
        status=TypesettingStatus.IN_PROGRESS.value,
        created_by_id=created_by_id,
        options=[
            TypesettingOption(option=o.option, selected=o.selected) for o in typesetting.options
        ],
        proofs=[
            TypesettingProof(
                proof_number=proof.proof_number,
                date_submitted=proof.date_submitted,
                approved=False,
                notes=proof.notes,
                proof_method=proof.proof_method,
                created_by_id=created_by_id,
                artwork=copy_artwork(proof.artwork, TypesettingProofArtwork),
            )
            for proof in typesetting.proofs
        ],
    )
