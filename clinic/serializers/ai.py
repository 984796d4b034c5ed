from rest_framework import serializers


class AnalyzeCheckupSerializer(serializers.Serializer):
    """Request body of the diagnosis-assistance endpoint."""
    patientInfo = serializers.DictField(required=False, default=dict)
    symptoms = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    checkupDetails = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    vitalSigns = serializers.DictField(required=False, default=dict)
    doctorNotes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    checkupId = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AnalysisSchema(serializers.Serializer):
    """Shape the model's JSON answer must have before it is normalised."""
    possibleDiagnoses = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=False)
    recommendedActions = serializers.CharField(allow_blank=False)
    confidence = serializers.JSONField()
    riskFactors = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False, default=list)
    followUpRecommendations = serializers.CharField(required=False, allow_blank=True, default='')
    confidenceExplanation = serializers.CharField(required=False, allow_blank=True, default='')
    additionalConsiderations = serializers.CharField(required=False, allow_blank=True, default='')
