from django.urls import path
from . import views

app_name = 'stores'

urlpatterns = [
    # GET  /api/stores/           - List configured stores
    path('', views.store_list, name='store-list'),
    # POST /api/stores/validate/  - Check coordinates against geofences
    path('validate/', views.validate_store_location, name='store-validate'),
]
