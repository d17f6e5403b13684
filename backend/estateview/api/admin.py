"""Admin API endpoints for content management."""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile

from estateview.api.faqs import faqs_query
from estateview.api.properties import get_property_or_404, property_to_response
from estateview.api.testimonials import testimonials_query
from estateview.config import settings
from estateview.database import get_db
from estateview.exceptions import NotFoundError, UploadRejectedError
from estateview.models.faq import FAQ
from estateview.models.property import Property
from estateview.models.testimonial import Testimonial
from estateview.schemas.faq import FAQCreate, FAQEnvelope, FAQListResponse, FAQPatch, FAQResponse
from estateview.schemas.property import (
    PropertyCollectionResponse,
    PropertyCreate,
    PropertyEnvelope,
    PropertyPatch,
)
from estateview.schemas.stats import StatisticsResponse
from estateview.schemas.testimonial import (
    TestimonialCreate,
    TestimonialEnvelope,
    TestimonialListResponse,
    TestimonialPatch,
    TestimonialResponse,
)
from estateview.services.image_storage import ImageStorage, get_image_storage
from estateview.services.statistics import compute_statistics
from estateview.utils.logging import get_logger
from estateview.utils.parsing import parse_record_id
from estateview.utils.security import require_admin

router = APIRouter(dependencies=[Depends(require_admin)])
logger = get_logger("api.admin")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _supplied(fields: dict) -> dict:
    return {key: value for key, value in fields.items() if value is not None}


# ---------------- PROPERTIES ----------------


def property_form(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    property_type: Optional[str] = Form(None, alias="type"),
    listing_status: Optional[str] = Form(None, alias="status"),
    featured: Optional[str] = Form(None),
    bedrooms: Optional[str] = Form(None),
    bathrooms: Optional[str] = Form(None),
    area: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    pincode: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    amenities: Optional[str] = Form(None, description="JSON array of strings"),
    existing_images: Optional[str] = Form(
        None, alias="existingImages", description="JSON array of image URIs to keep"
    ),
) -> dict:
    """Named multipart fields of a property; anything else in the form is ignored."""
    return _supplied({
        "title": title,
        "description": description,
        "type": property_type,
        "status": listing_status,
        "featured": featured,
        "bedrooms": bedrooms,
        "bathrooms": bathrooms,
        "area": area,
        "city": city,
        "state": state,
        "pincode": pincode,
        "price": price,
        "amenities": amenities,
        "images": existing_images,
    })


async def save_property_images(
    storage: ImageStorage,
    images: Optional[List[UploadFile]],
) -> List[str]:
    uploads = [image for image in images or [] if storage.is_present(image)]
    if len(uploads) > settings.max_property_images:
        raise UploadRejectedError(
            f"Too many files. Maximum is {settings.max_property_images} images."
        )
    return await storage.save_all(uploads, "images")


def apply_property_changes(property_data: Property, changes: dict) -> None:
    for field, value in changes.items():
        if field == "amenities":
            property_data.amenity_list = value
        elif field == "images":
            property_data.image_list = value
        else:
            setattr(property_data, field, value)
    property_data.refresh_derived_fields()
    property_data.updated_at = _now()


@router.get("/properties", response_model=PropertyCollectionResponse)
async def list_all_properties(
    db: AsyncSession = Depends(get_db),
) -> PropertyCollectionResponse:
    """List every property, newest first."""
    result = await db.execute(
        select(Property).order_by(Property.created_at.desc(), Property.id.desc())
    )
    properties = result.scalars().all()

    return PropertyCollectionResponse(
        data=[property_to_response(p) for p in properties],
        total=len(properties),
    )


@router.post("/properties", response_model=PropertyEnvelope, status_code=status.HTTP_201_CREATED)
async def create_property(
    fields: dict = Depends(property_form),
    images: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> PropertyEnvelope:
    """Create a property listing with optional image uploads."""
    fields.pop("images", None)
    request = PropertyCreate.model_validate(fields)
    image_urls = await save_property_images(storage, images)

    now = _now()
    property_data = Property(
        title=request.title,
        description=request.description,
        type=request.type.value,
        status=request.status.value,
        featured=request.featured,
        bedrooms=request.bedrooms,
        bathrooms=request.bathrooms,
        area=request.area,
        city=request.city,
        state=request.state,
        pincode=request.pincode,
        price=request.price,
        created_at=now,
        updated_at=now,
    )
    property_data.amenity_list = request.amenities
    property_data.image_list = image_urls
    property_data.refresh_derived_fields()

    db.add(property_data)
    await db.flush()
    await db.refresh(property_data)

    logger.info("property_created", property_id=property_data.id, images=len(image_urls))
    return PropertyEnvelope(
        message="Property created successfully",
        data=property_to_response(property_data),
    )


@router.put("/properties/{property_id}", response_model=PropertyEnvelope)
async def update_property(
    property_id: str,
    fields: dict = Depends(property_form),
    images: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> PropertyEnvelope:
    """Patch a property. Omitted fields keep their current values.

    Images become ``existingImages`` (or the current images when omitted)
    followed by any new uploads.
    """
    property_data = await get_property_or_404(db, property_id)
    patch = PropertyPatch.model_validate(fields)
    new_images = await save_property_images(storage, images)

    changes = patch.changes()
    kept_images = changes.pop("images", None)
    if kept_images is not None or new_images:
        base = kept_images if kept_images is not None else property_data.image_list
        changes["images"] = base + new_images

    apply_property_changes(property_data, changes)
    await db.flush()
    await db.refresh(property_data)

    logger.info("property_updated", property_id=property_data.id, fields=sorted(changes))
    return PropertyEnvelope(
        message="Property updated successfully",
        data=property_to_response(property_data),
    )


@router.delete("/properties/{property_id}", response_model=PropertyEnvelope)
async def delete_property(
    property_id: str,
    db: AsyncSession = Depends(get_db),
) -> PropertyEnvelope:
    """Hard delete a property and return its last state."""
    property_data = await get_property_or_404(db, property_id)
    snapshot = property_to_response(property_data)

    await db.delete(property_data)
    await db.flush()

    logger.info("property_deleted", property_id=snapshot.id)
    return PropertyEnvelope(message="Property deleted successfully", data=snapshot)


# ---------------- TESTIMONIALS ----------------


def testimonial_form(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    featured: Optional[str] = Form(None),
) -> dict:
    """Named multipart fields of a testimonial; profileImage is read separately."""
    return _supplied({
        "title": title,
        "content": content,
        "author": author,
        "location": location,
        "rating": rating,
        "featured": featured,
    })


async def read_profile_image(request: Request):
    """The profileImage part may be an uploaded file or a plain URI string."""
    form = await request.form()
    return form.get("profileImage")


async def get_testimonial_or_404(db: AsyncSession, testimonial_id: str) -> Testimonial:
    record_id = parse_record_id(testimonial_id)
    testimonial = None
    if record_id is not None:
        result = await db.execute(select(Testimonial).where(Testimonial.id == record_id))
        testimonial = result.scalar_one_or_none()

    if not testimonial:
        raise NotFoundError.for_entity("Testimonial")

    return testimonial


@router.get("/testimonials", response_model=TestimonialListResponse)
async def list_all_testimonials(
    db: AsyncSession = Depends(get_db),
) -> TestimonialListResponse:
    result = await db.execute(testimonials_query())
    testimonials = result.scalars().all()

    return TestimonialListResponse(
        data=[TestimonialResponse.model_validate(t) for t in testimonials],
        total=len(testimonials),
    )


@router.post(
    "/testimonials",
    response_model=TestimonialEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_testimonial(
    request: Request,
    fields: dict = Depends(testimonial_form),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> TestimonialEnvelope:
    """Create a testimonial with an optional profile image."""
    profile_image = await read_profile_image(request)
    if isinstance(profile_image, str):
        fields["profile_image"] = profile_image

    data = TestimonialCreate.model_validate(fields)
    image_url = data.profile_image
    if isinstance(profile_image, StarletteUploadFile):
        image_url = await storage.save(profile_image, "profileImage") or image_url

    now = _now()
    testimonial = Testimonial(
        title=data.title,
        content=data.content,
        author=data.author,
        location=data.location,
        profile_image=image_url,
        rating=data.rating,
        featured=data.featured,
        created_at=now,
        updated_at=now,
    )

    db.add(testimonial)
    await db.flush()
    await db.refresh(testimonial)

    logger.info("testimonial_created", testimonial_id=testimonial.id)
    return TestimonialEnvelope(
        message="Testimonial created successfully",
        data=TestimonialResponse.model_validate(testimonial),
    )


@router.put("/testimonials/{testimonial_id}", response_model=TestimonialEnvelope)
async def update_testimonial(
    testimonial_id: str,
    request: Request,
    fields: dict = Depends(testimonial_form),
    db: AsyncSession = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> TestimonialEnvelope:
    """Patch a testimonial. Omitted fields keep their current values."""
    testimonial = await get_testimonial_or_404(db, testimonial_id)

    profile_image = await read_profile_image(request)
    if isinstance(profile_image, str) and profile_image.strip():
        fields["profile_image"] = profile_image

    patch = TestimonialPatch.model_validate(fields)
    changes = patch.changes()
    if isinstance(profile_image, StarletteUploadFile):
        image_url = await storage.save(profile_image, "profileImage")
        if image_url:
            changes["profile_image"] = image_url

    for field, value in changes.items():
        setattr(testimonial, field, value)
    testimonial.updated_at = _now()

    await db.flush()
    await db.refresh(testimonial)

    logger.info("testimonial_updated", testimonial_id=testimonial.id, fields=sorted(changes))
    return TestimonialEnvelope(
        message="Testimonial updated successfully",
        data=TestimonialResponse.model_validate(testimonial),
    )


@router.delete("/testimonials/{testimonial_id}", response_model=TestimonialEnvelope)
async def delete_testimonial(
    testimonial_id: str,
    db: AsyncSession = Depends(get_db),
) -> TestimonialEnvelope:
    testimonial = await get_testimonial_or_404(db, testimonial_id)
    snapshot = TestimonialResponse.model_validate(testimonial)

    await db.delete(testimonial)
    await db.flush()

    logger.info("testimonial_deleted", testimonial_id=snapshot.id)
    return TestimonialEnvelope(message="Testimonial deleted successfully", data=snapshot)


# ---------------- FAQS ----------------


async def get_faq_or_404(db: AsyncSession, faq_id: str) -> FAQ:
    record_id = parse_record_id(faq_id)
    faq = None
    if record_id is not None:
        result = await db.execute(select(FAQ).where(FAQ.id == record_id))
        faq = result.scalar_one_or_none()

    if not faq:
        raise NotFoundError.for_entity("FAQ")

    return faq


@router.get("/faqs", response_model=FAQListResponse)
async def list_all_faqs(
    db: AsyncSession = Depends(get_db),
) -> FAQListResponse:
    result = await db.execute(faqs_query())
    faqs = result.scalars().all()

    return FAQListResponse(
        data=[FAQResponse.model_validate(f) for f in faqs],
        total=len(faqs),
    )


@router.post("/faqs", response_model=FAQEnvelope, status_code=status.HTTP_201_CREATED)
async def create_faq(
    request: FAQCreate,
    db: AsyncSession = Depends(get_db),
) -> FAQEnvelope:
    now = _now()
    faq = FAQ(
        question=request.question,
        answer=request.answer,
        category=request.category,
        featured=request.featured,
        order=request.order,
        created_at=now,
        updated_at=now,
    )

    db.add(faq)
    await db.flush()
    await db.refresh(faq)

    logger.info("faq_created", faq_id=faq.id)
    return FAQEnvelope(message="FAQ created successfully", data=FAQResponse.model_validate(faq))


@router.put("/faqs/{faq_id}", response_model=FAQEnvelope)
async def update_faq(
    faq_id: str,
    request: FAQPatch,
    db: AsyncSession = Depends(get_db),
) -> FAQEnvelope:
    """Patch an FAQ. Unknown fields are rejected."""
    faq = await get_faq_or_404(db, faq_id)

    changes = request.changes()
    for field, value in changes.items():
        setattr(faq, field, value)
    faq.updated_at = _now()

    await db.flush()
    await db.refresh(faq)

    logger.info("faq_updated", faq_id=faq.id, fields=sorted(changes))
    return FAQEnvelope(message="FAQ updated successfully", data=FAQResponse.model_validate(faq))


@router.delete("/faqs/{faq_id}", response_model=FAQEnvelope)
async def delete_faq(
    faq_id: str,
    db: AsyncSession = Depends(get_db),
) -> FAQEnvelope:
    faq = await get_faq_or_404(db, faq_id)
    snapshot = FAQResponse.model_validate(faq)

    await db.delete(faq)
    await db.flush()

    logger.info("faq_deleted", faq_id=snapshot.id)
    return FAQEnvelope(message="FAQ deleted successfully", data=snapshot)


# ---------------- STATISTICS ----------------


@router.get("/stats", response_model=StatisticsResponse)
async def get_statistics(
    db: AsyncSession = Depends(get_db),
) -> StatisticsResponse:
    """Aggregate counts and price totals over all content."""
    properties = (await db.execute(select(Property))).scalars().all()
    testimonials = (await db.execute(select(Testimonial))).scalars().all()
    faqs = (await db.execute(select(FAQ))).scalars().all()

    return StatisticsResponse(data=compute_statistics(properties, testimonials, faqs))
