from tenthouse.db.session import SessionLocal, engine
from tenthouse.db.mixins import Base
from tenthouse.db.models.testimonial import Testimonial
from tenthouse.services.admin import TestimonialAdminService
from tenthouse.services.testimonials import TestimonialService

SAMPLE_TESTIMONIALS = [
    ("Rajesh Kumar", 5, "Excellent service for our wedding! The tent decoration was beautiful and the team was very professional. Highly recommended!"),
    ("Priya Sharma", 5, "Amazing work for our daughter's birthday party. The lighting and decorations exceeded our expectations. Thank you Mahadev Tent House!"),
    ("Vikram Singh", 4, "Good quality tents and timely setup for our corporate event. Professional service at reasonable rates."),
    ("Sunita Devi", 5, "Perfect arrangements for our religious function. The team was respectful and handled everything with care."),
    ("Amit Joshi", 4, "Great service for our anniversary celebration. Beautiful decorations and professional staff."),
]

def seed_testimonial(db, name: str, rating: int, message: str):
    existing = db.query(Testimonial).filter(Testimonial.name == name).first()
    if existing:
        return None

    # no rate limiter and no notifier: seeding is not a visitor
    result = TestimonialService(db).submit(name, rating, message, ip="127.0.0.1")
    TestimonialAdminService(db).set_status(result.id, "approved")
    return result.id

def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        for name, rating, message in SAMPLE_TESTIMONIALS:
            if seed_testimonial(db, name, rating, message):
                print(f"Added testimonial from {name}")

        count = db.query(Testimonial).count()
        print(f"✅ Seed complete. Total testimonials in DB: {count}")
    except Exception as e:
        db.rollback()
        print("❌ Seed failed:", e)
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
