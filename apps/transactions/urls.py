from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'transactions'

router = SimpleRouter()
router.register(r'', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # Transaction ViewSet routes
    # GET    /api/transactions/                 - List transactions
    # GET    /api/transactions/{id}/            - Get transaction details
    # POST   /api/transactions/purchases/       - Register purchase (geofenced)
    # POST   /api/transactions/redemptions/     - Request redemption
    # GET    /api/transactions/pending/         - Approval queue
    # POST   /api/transactions/{id}/approve/    - Approve (managers)
    # POST   /api/transactions/{id}/reject/     - Reject (managers)
    path('', include(router.urls)),
]
