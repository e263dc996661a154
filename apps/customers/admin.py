from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Customers; the balance is read-only because only the ledger may change it."""

    list_display = ['get_display_name', 'phone', 'balance', 'created_at']
    search_fields = ['name', 'phone']
    readonly_fields = ['balance', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def get_display_name(self, obj):
        return obj.get_display_name()
    get_display_name.short_description = 'Customer'
    get_display_name.admin_order_field = 'name'
