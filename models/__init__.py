# Import every model module so string-based relationships resolve on first use.
from models import userModel, productModels, orderModels, reviewModels, notificationModels  # noqa: F401
