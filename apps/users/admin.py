from django.contrib import admin

from .models import User, Profile, ProfilePhoto, Hobby, ProfileHobby, DeviceToken

# Register your models here.
admin.site.register(User)
admin.site.register(ProfilePhoto)
admin.site.register(ProfileHobby)
admin.site.register(DeviceToken)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'display_name', 'age', 'gender', 'status', 'radius_preference']
    list_filter = ['status', 'gender']
    search_fields = ['user__username', 'display_name']


@admin.register(Hobby)
class HobbyAdmin(admin.ModelAdmin):
    list_display = ['name', 'category']
    list_filter = ['category']
    search_fields = ['name']
