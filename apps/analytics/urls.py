from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Period metrics
    path('metrics/', views.period_metrics, name='period-metrics'),

    # Customer views
    path('customers/profiles/', views.customer_profiles, name='customer-profiles'),
    path('customers/activity/', views.customer_activity, name='customer-activity'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
]
