from django.db import migrations

def create_standard_formats(apps, schema_editor):
    """
    Creates the formats we expect in SWORD deposits
    """
    BitstreamFormat = apps.get_model('sword2', 'BitstreamFormat')

    formats = [
        {
            'mimetype' : 'application/zip',
            'short_description' : 'ZIP archive',
            'extensions' : 'zip',
        },
        {
            'mimetype' : 'application/xml',
            'short_description' : 'XML',
            'extensions' : 'xml',
        },
        {
            'mimetype' : 'application/atom+xml',
            'short_description' : 'Atom document',
            'extensions' : 'atom,xml',
        },
        {
            'mimetype' : 'application/pdf',
            'short_description' : 'Adobe PDF',
            'extensions' : 'pdf',
        },
        {
            'mimetype' : 'text/plain',
            'short_description' : 'Text',
            'extensions' : 'txt,asc',
        },
        {
            'mimetype' : 'image/jpeg',
            'short_description' : 'JPEG',
            'extensions' : 'jpeg,jpg',
        },
        {
            'mimetype' : 'image/png',
            'short_description' : 'PNG',
            'extensions' : 'png',
        },
    ]

    BitstreamFormat.objects.bulk_create([BitstreamFormat(**f) for f in formats])


def remove_standard_formats(apps, schema_editor):
    BitstreamFormat = apps.get_model('sword2', 'BitstreamFormat')
    BitstreamFormat.objects.all().delete()


class Migration(migrations.Migration):

    dependencies = [
        ('sword2', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_standard_formats, remove_standard_formats),
    ]
