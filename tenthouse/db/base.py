from tenthouse.db.mixins import Base   # ✅ import Base from mixins

# Import all models so Alembic can detect them
from tenthouse.db.models.testimonial import Testimonial
from tenthouse.db.models.inquiry import Inquiry
