"""
Routing Forms
"""

from django import forms

COORDINATE_FIELDS = ('start_lat', 'start_lng', 'end_lat', 'end_lng')


def is_json_number(value):
    # bool is an int subclass; JSON true/false are not coordinates
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RouteRequestForm(forms.Form):
    """Validates the start/end points of a route request"""

    start_lat = forms.FloatField(min_value=-90, max_value=90)
    start_lng = forms.FloatField(min_value=-180, max_value=180)
    end_lat = forms.FloatField(min_value=-90, max_value=90)
    end_lng = forms.FloatField(min_value=-180, max_value=180)

    @classmethod
    def from_payload(cls, payload):
        """Build the form from a {'start': {lat, lng}, 'end': {lat, lng}} body"""
        data = {}
        for point in ('start', 'end'):
            value = payload.get(point) if isinstance(payload, dict) else None
            if isinstance(value, dict):
                data[f'{point}_lat'] = value.get('lat')
                data[f'{point}_lng'] = value.get('lng')
        return cls(data)

    def clean(self):
        cleaned_data = super().clean()
        for name in COORDINATE_FIELDS:
            raw = self.data.get(name)
            if raw is not None and not is_json_number(raw) and name not in self.errors:
                self.add_error(name, 'Coordinates must be JSON numbers.')
        return cleaned_data

    def points(self):
        data = self.cleaned_data
        return (
            {'lat': data['start_lat'], 'lng': data['start_lng']},
            {'lat': data['end_lat'], 'lng': data['end_lng']},
        )
