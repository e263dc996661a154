from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'customers'

router = SimpleRouter()
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET    /api/customers/                     - List/search customers
    # GET    /api/customers/{id}/                - Customer detail with balance
    # POST   /api/customers/identify/            - Find or register by phone
    # GET    /api/customers/{id}/transactions/   - Transaction history
    path('', include(router.urls)),
]
