# tenthouse/db/models/__init__.py
from .testimonial import Testimonial
from .inquiry import Inquiry
