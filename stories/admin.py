from django.contrib import admin
from django.db.models import Count
from .models import Story, Comment


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ("commenter_name", "comment_text", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Story)
class StoryAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "author_name", "comments_count", "created_at", "updated_at")
    list_filter = ("created_at",)
    search_fields = ("title", "author_name")
    readonly_fields = ("created_at",)
    inlines = [CommentInline]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(comments_count=Count("comments"))

    @admin.display(description="Comments", ordering="comments_count")
    def comments_count(self, obj):
        return obj.comments_count


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("id", "story", "commenter_name", "created_at")
    list_filter = ("created_at",)
    search_fields = ("commenter_name", "comment_text")
    list_select_related = ("story",)
    readonly_fields = ("created_at",)
