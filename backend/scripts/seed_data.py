"""Seed database with sample properties, testimonials and FAQs."""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from estateview.database import async_session_maker, engine, init_db
from estateview.models.faq import FAQ
from estateview.models.property import Property, PropertyStatus, PropertyType
from estateview.models.testimonial import Testimonial


SAMPLE_PROPERTIES = [
    {
        "title": "Modern 3BHK Apartment with City Views",
        "description": "Bright corner apartment close to the metro, schools and malls.",
        "type": PropertyType.APARTMENT.value,
        "status": PropertyStatus.FOR_SALE.value,
        "bedrooms": 3,
        "bathrooms": 2,
        "area": "1450 sq ft",
        "city": "Bangalore",
        "state": "Karnataka",
        "pincode": "560066",
        "price": 8500000,  # 85 lakhs
        "featured": True,
        "amenities": ["Gym", "Swimming Pool", "24/7 Security", "Power Backup"],
    },
    {
        "title": "Luxury Villa with Private Garden",
        "description": "Independent villa in a gated community, ideal for families.",
        "type": PropertyType.VILLA.value,
        "status": PropertyStatus.FOR_SALE.value,
        "bedrooms": 4,
        "bathrooms": 4,
        "area": "3200 sq ft",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411045",
        "price": 25000000,  # 2.5 crore
        "featured": True,
        "amenities": ["Private Garden", "Clubhouse", "Parking"],
    },
    {
        "title": "Cozy Loft in the Arts District",
        "description": "Open-plan loft with high ceilings and exposed brick.",
        "type": PropertyType.LOFT.value,
        "status": PropertyStatus.FOR_RENT.value,
        "bedrooms": 1,
        "bathrooms": 1,
        "area": "780 sq ft",
        "city": "Mumbai",
        "state": "Maharashtra",
        "pincode": "400013",
        "price": 65000,  # monthly rent
        "featured": False,
        "amenities": ["Lift", "Power Backup"],
    },
    {
        "title": "Family Townhouse near Lakeside Park",
        "description": "Three-level townhouse with a terrace and two covered parking spots.",
        "type": PropertyType.TOWNHOUSE.value,
        "status": PropertyStatus.FOR_SALE.value,
        "bedrooms": 3,
        "bathrooms": 3,
        "area": "2100 sq ft",
        "city": "Hyderabad",
        "state": "Telangana",
        "pincode": "500032",
        "price": 14500000,
        "featured": False,
        "amenities": ["Terrace", "Parking", "Kids Play Area"],
    },
    {
        "title": "Sky Penthouse with Panoramic Deck",
        "description": "Top-floor penthouse with a wraparound deck and private lift.",
        "type": PropertyType.PENTHOUSE.value,
        "status": PropertyStatus.SOLD.value,
        "bedrooms": 5,
        "bathrooms": 5,
        "area": "4800 sq ft",
        "city": "Mumbai",
        "state": "Maharashtra",
        "pincode": "400050",
        "price": 95000000,
        "featured": True,
        "amenities": ["Private Lift", "Jacuzzi", "Home Theatre", "Concierge"],
    },
    {
        "title": "Quiet Independent House in Green Suburb",
        "description": "Detached house on a tree-lined street with a kitchen garden.",
        "type": PropertyType.HOUSE.value,
        "status": PropertyStatus.RENTED.value,
        "bedrooms": 2,
        "bathrooms": 2,
        "area": "1300 sq ft",
        "city": "Chennai",
        "state": "Tamil Nadu",
        "pincode": "600041",
        "price": 42000,
        "featured": False,
        "amenities": ["Garden", "Borewell"],
    },
]

SAMPLE_TESTIMONIALS = [
    {
        "title": "Found our dream home",
        "content": "The team understood exactly what we were looking for and made the purchase painless.",
        "author": "Priya Sharma",
        "location": "Bangalore, Karnataka",
        "rating": 5,
        "featured": True,
    },
    {
        "title": "Smooth rental experience",
        "content": "Listings were accurate and the site visit was arranged the same week.",
        "author": "Arjun Mehta",
        "location": "Mumbai, Maharashtra",
        "rating": 4,
        "featured": True,
    },
    {
        "title": "Great for first-time buyers",
        "content": "Clear answers to every question about loans and paperwork.",
        "author": "Neha Iyer",
        "location": "Chennai, Tamil Nadu",
        "rating": 5,
        "featured": False,
    },
]

SAMPLE_FAQS = [
    {
        "question": "How do I schedule a property visit?",
        "answer": "Open the property page and use the contact form; an agent will confirm a slot.",
        "category": "General",
        "featured": True,
        "order": 1,
    },
    {
        "question": "Are the listed prices negotiable?",
        "answer": "Most sellers are open to offers. Your agent will share the seller's position.",
        "category": "Buying",
        "featured": True,
        "order": 2,
    },
    {
        "question": "What documents do I need to rent?",
        "answer": "Government ID, proof of income and a refundable security deposit.",
        "category": "Renting",
        "featured": False,
        "order": 3,
    },
]


async def seed_content() -> None:
    """Insert sample rows unless the database already has properties."""
    async with async_session_maker() as db:
        existing_count = await db.scalar(select(func.count(Property.id)))

        if existing_count:
            print(f"Database already has {existing_count} properties. Skipping seed.")
            return

        # Spread creation times so the default newest-first ordering is stable
        base_time = datetime.now(timezone.utc) - timedelta(days=len(SAMPLE_PROPERTIES))

        for index, prop_data in enumerate(SAMPLE_PROPERTIES):
            data = dict(prop_data)
            amenities = data.pop("amenities")
            created = base_time + timedelta(days=index)
            property_obj = Property(**data, created_at=created, updated_at=created)
            property_obj.amenity_list = amenities
            property_obj.image_list = []
            property_obj.refresh_derived_fields()
            db.add(property_obj)

        now = datetime.now(timezone.utc)
        for testimonial_data in SAMPLE_TESTIMONIALS:
            db.add(Testimonial(**testimonial_data, created_at=now, updated_at=now))

        for faq_data in SAMPLE_FAQS:
            db.add(FAQ(**faq_data, created_at=now, updated_at=now))

        await db.commit()
        print(
            f"Added {len(SAMPLE_PROPERTIES)} properties, "
            f"{len(SAMPLE_TESTIMONIALS)} testimonials and {len(SAMPLE_FAQS)} FAQs."
        )


async def main():
    """Run the seed script."""
    await init_db()
    await seed_content()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
