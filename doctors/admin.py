"""
Django admin registration for the doctor registry.

Doctors cannot be deleted from the admin either; use the ``active``
flag instead.
"""

from django.contrib import admin

from .models import Doctor


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'crm', 'specialty', 'email', 'active')
    list_filter = ('specialty', 'active')
    search_fields = ('name', 'crm', 'email')

    def get_readonly_fields(self, request, obj=None):
        # crm and specialty are fixed once the doctor exists
        if obj is not None:
            return ('crm', 'specialty')
        return ()

    def has_delete_permission(self, request, obj=None):
        return False
