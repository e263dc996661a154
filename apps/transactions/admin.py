# ==========================================
# apps/transactions/admin.py
# ==========================================

from django.contrib import admin, messages
from django.utils.html import format_html
from .models import Transaction, TransactionStatus
from .services import approve_transaction, reject_transaction
from .services.exceptions import LedgerServiceError


STATUS_COLORS = {
    TransactionStatus.PENDING: ('#FEF3C7', '#92400E'),
    TransactionStatus.APPROVED: ('#DCFCE7', '#166534'),
    TransactionStatus.REJECTED: ('#FEE2E2', '#991B1B'),
}


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin interface for ledger transactions.

    Transactions are read-only here: status changes go through the ledger
    service via the bulk actions, so balance rules always apply.
    """

    list_display = [
        'created_at',
        'get_customer_name',
        'type',
        'amount',
        'cashback_amount',
        'status_badge',
        'store_id',
        'reviewed_by',
    ]

    list_filter = [
        'status',
        'type',
        'store_id',
        'created_at',
    ]

    search_fields = [
        'customer__name',
        'customer__phone',
    ]

    readonly_fields = [
        'customer',
        'type',
        'amount',
        'cashback_amount',
        'status',
        'store_id',
        'latitude',
        'longitude',
        'distance_meters',
        'reviewed_by',
        'reviewed_at',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Transaction', {
            'fields': (
                'customer',
                'type',
                'amount',
                'cashback_amount',
                'status',
            )
        }),
        ('Location', {
            'fields': (
                'store_id',
                'latitude',
                'longitude',
                'distance_meters',
            ),
            'classes': ('collapse',),
        }),
        ('Review', {
            'fields': ('reviewed_by', 'reviewed_at'),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    actions = [
        'approve_selected',
        'reject_selected',
    ]

    def get_customer_name(self, obj):
        return obj.customer.get_display_name()
    get_customer_name.short_description = 'Customer'
    get_customer_name.admin_order_field = 'customer__name'

    def status_badge(self, obj):
        """Display transaction status as colored badge."""
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def _review(self, request, queryset, operation, verb):
        done = 0
        for tx in queryset.order_by('created_at'):
            try:
                operation(transaction_id=tx.id, reviewed_by=request.user)
                done += 1
            except LedgerServiceError as e:
                self.message_user(
                    request,
                    f'{tx.get_type_display()} {tx.amount} for {tx.customer.get_display_name()}: {e}',
                    level=messages.WARNING,
                )
        self.message_user(request, f'{verb} {done} transaction(s).')

    @admin.action(description='Approve selected transactions')
    def approve_selected(self, request, queryset):
        self._review(request, queryset, approve_transaction, 'Approved')

    @admin.action(description='Reject selected transactions')
    def reject_selected(self, request, queryset):
        self._review(request, queryset, reject_transaction, 'Rejected')

    def has_add_permission(self, request):
        """Transactions are created through the API, never by hand."""
        return False

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('customer', 'reviewed_by')
