from fastapi import HTTPException, status


class OutletException(HTTPException):
    status_code = 500
    detail = ""

    def __init__(self, detail=None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail)


class CategoryNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Category not found."


class CategoryInUseException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Category still has rooms assigned to it."


class AmenityNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Amenity not found."


class RoomNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Room not found."


class RoomUnavailableException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Room is not available for the requested dates."


class BookingNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Booking not found."


class BookingNotActiveException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Booking is not active."


class InvalidStayExtensionException(OutletException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "New check-out date must be after the current one."


class MenuItemNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Menu item not found."


class OrderNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Order not found."


class InvalidOrderTransitionException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Order cannot be advanced from its current status."


class InvalidDateRangeException(OutletException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Field 'check_out' cannot be before 'check_in'."


class MenuItemInUseException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Menu item is referenced by existing orders."


class MenuCategoryNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Menu category not found."


class MenuCategoryInUseException(OutletException):
    status_code = status.HTTP_409_CONFLICT
    detail = "Menu category still has sub-categories."


class SubCategoryNotFoundException(OutletException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Sub-category not found."


class InvalidDiscountException(OutletException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Discount price cannot exceed the menu price."
