from django.contrib import admin

from hrm.org import models


@admin.register(models.Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "slug", "is_active", "created_at"]
    search_fields = ["name", "slug"]
    list_filter = ["is_active", "created_at"]
    prepopulated_fields = {"slug": ("name",)}
