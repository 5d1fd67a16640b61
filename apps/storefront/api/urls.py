from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    CategoryViewSet,
    ProductViewSet,
    AttributeTypeViewSet,
    AttributeOptionViewSet,
)

router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'products', ProductViewSet, basename='product')
router.register(r'attribute-types', AttributeTypeViewSet, basename='attribute-type')
router.register(r'attribute-options', AttributeOptionViewSet, basename='attribute-option')

urlpatterns = [
    path('', include(router.urls)),
]
