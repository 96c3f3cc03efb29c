from django.contrib import admin

from hrm.devices import models


@admin.register(models.HrmDevice)
class HrmDeviceAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "organization", "active", "created_at"]
    search_fields = ["name", "organization__name"]
    list_filter = ["active", "organization", "created_at", "updated_at"]
    readonly_fields = ["api_key", "created_at", "updated_at"]
