"""
floatfmt — пользовательские форматы чисел с плавающей точкой.

Произвольная раскладка битов (знак, ширина экспоненты и мантиссы, bias)
и конверсия между packed bit pattern, компонентами, десятичным текстом
и native f32/f64. Не зависит от внешних систем.
"""
