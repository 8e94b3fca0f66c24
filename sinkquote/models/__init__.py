# sinkquote/models/__init__.py
from sinkquote.models.user_models import Company, User
from sinkquote.models.activity_models import UserActivity
from sinkquote.models.customer_models import Customer
from sinkquote.models.measurement_models import Measurement
from sinkquote.models.sink_models import Sink
from sinkquote.models.quote_models import Quote, QuoteLineItem
